"""Models module for the classifier lab.

This module provides the four classifiers of the lab:
- One-rule classifier
- Naive Bayes over discrete features
- k-nearest-neighbors
- Binary decision tree (Gini impurity)

Importing the module registers every classifier with ModelFactory.
"""

# Base classes and factory
from .base import (
    BaseClassifier,
    ModelFactory,
    UntrainedModelError,
    DEFAULT_MODELS,
    safe_int
)

from .one_rule import OneRuleClassifier
from .naive_bayes import NaiveBayesClassifier
from .knn import KNNClassifier
from .decision_tree import DecisionTreeClassifier, Leaf, Decision, gini_impurity

__all__ = [
    'BaseClassifier',
    'ModelFactory',
    'UntrainedModelError',
    'DEFAULT_MODELS',
    'safe_int',
    'OneRuleClassifier',
    'NaiveBayesClassifier',
    'KNNClassifier',
    'DecisionTreeClassifier',
    'Leaf',
    'Decision',
    'gini_impurity'
]
