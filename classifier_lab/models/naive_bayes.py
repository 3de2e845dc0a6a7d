"""Categorical naive Bayes classifier."""

import math
from typing import Any, Dict, Optional, Sequence
from loguru import logger

from ..data import ClassificationDataset
from .base import BaseClassifier, ModelFactory, UntrainedModelError, count_values, first_argmax


class NaiveBayesClassifier(BaseClassifier):
    """
    Naive Bayes over discrete feature values.

    Learns class priors and per-class, per-feature value frequencies, then
    ranks labels by log posterior. A value never seen for a class during
    training contributes log(1 / (n_classes + 1)) instead of log(0).

    Attributes:
        priors: label -> P(label)
        conditionals: label -> feature index -> value -> P(value | label)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.priors: Dict[int, float] = {}
        self.conditionals: Dict[int, Dict[int, Dict[int, float]]] = {}

    def name(self) -> str:
        return "Naive Bayes"

    def train(self, dataset: ClassificationDataset) -> None:
        self.priors = {}
        self.conditionals = {}

        tuples = dataset.training_data
        if not tuples:
            logger.warning(f"{self.model_name} received no training data")
            self.fitted = False
            return

        class_counts = count_values(t.target for t in tuples)
        feature_counts: Dict[int, Dict[int, Dict[int, int]]] = {}
        for t in tuples:
            per_feature = feature_counts.setdefault(t.target, {})
            for feature_index, value in enumerate(t.features):
                value_counts = per_feature.setdefault(feature_index, {})
                value_counts[value] = value_counts.get(value, 0) + 1

        total = len(tuples)
        self.priors = {label: count / total for label, count in class_counts.items()}

        for label, per_feature in feature_counts.items():
            self.conditionals[label] = {}
            for feature_index, value_counts in per_feature.items():
                feature_total = sum(value_counts.values())
                self.conditionals[label][feature_index] = {
                    value: count / feature_total for value, count in value_counts.items()
                }

        self.fitted = True
        logger.info(f"{self.model_name} trained on {total} samples, {len(self.priors)} classes")

    def log_posteriors(self, features: Sequence[int]) -> Dict[int, float]:
        """
        Unnormalized log posterior of every known label.

        Args:
            features: Feature vector to score

        Returns:
            label -> log P(label) + sum of log P(value | label), in prior order
        """
        if not self.priors:
            raise UntrainedModelError(self.model_name)

        unseen = math.log(1.0 / (len(self.priors) + 1))
        posteriors = {}
        for label, prior in self.priors.items():
            per_feature = self.conditionals.get(label, {})
            score = math.log(prior)
            for feature_index, value in enumerate(features):
                probability = per_feature.get(feature_index, {}).get(value)
                score += math.log(probability) if probability is not None else unseen
            posteriors[label] = score

        return posteriors

    def classify_features(self, features: Sequence[int]) -> int:
        return first_argmax(self.log_posteriors(features))

    def count_parameters(self) -> int:
        conditional_entries = sum(
            len(values)
            for per_feature in self.conditionals.values()
            for values in per_feature.values()
        )
        return len(self.priors) + conditional_entries


ModelFactory.register_model('naive_bayes', NaiveBayesClassifier)
