"""Classic classifier laboratory."""

from .data import DataTuple, ClassificationDataset, DatasetLoader
from .models import (
    ModelFactory,
    UntrainedModelError,
    OneRuleClassifier,
    NaiveBayesClassifier,
    KNNClassifier,
    DecisionTreeClassifier
)
from .utils import Config, ModelAnalyzer
from .metrics import MetricsWrapper
from .runner import LabRunner


__all__ = [
    'DataTuple',
    'ClassificationDataset',
    'DatasetLoader',
    'ModelFactory',
    'UntrainedModelError',
    'OneRuleClassifier',
    'NaiveBayesClassifier',
    'KNNClassifier',
    'DecisionTreeClassifier',
    'Config',
    'ModelAnalyzer',
    'MetricsWrapper',
    'LabRunner'
]
