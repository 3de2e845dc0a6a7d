"""One-rule classifier: predicts from the single most reliable feature."""

from typing import Any, Dict, Optional, Sequence
from loguru import logger

from ..data import ClassificationDataset
from .base import BaseClassifier, ModelFactory, UntrainedModelError, count_values, first_argmax


class OneRuleClassifier(BaseClassifier):
    """
    1-Rule classifier.

    For each feature a value -> majority label table is built; the feature
    whose table makes the fewest training mistakes becomes the rule.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.selected_feature: Optional[int] = None
        self.rule: Dict[int, int] = {}
        self.training_error: Optional[int] = None

    def name(self) -> str:
        return "1-Rule"

    def train(self, dataset: ClassificationDataset) -> None:
        self.selected_feature = None
        self.rule = {}
        self.training_error = None

        tuples = dataset.training_data
        if not tuples:
            logger.warning(f"{self.model_name} received no training data")
            self.fitted = False
            return

        for feature_index in range(tuples[0].n_features):
            table = self._build_table(dataset, feature_index)
            errors = sum(1 for t in tuples if t.target != table[t.features[feature_index]])

            # Strict comparison keeps the earliest feature on ties
            if self.training_error is None or errors < self.training_error:
                self.training_error = errors
                self.selected_feature = feature_index
                self.rule = table

        self.fitted = True
        logger.info(f"{self.model_name} trained: feature {self.selected_feature}, "
                    f"{self.training_error} training errors")

    @staticmethod
    def _build_table(dataset: ClassificationDataset, feature_index: int) -> Dict[int, int]:
        """Map every observed value of a feature to its most frequent label."""
        label_counts: Dict[int, Dict[int, int]] = {}
        for t in dataset.training_data:
            counts = label_counts.setdefault(t.features[feature_index], {})
            counts[t.target] = counts.get(t.target, 0) + 1

        return {value: first_argmax(counts) for value, counts in label_counts.items()}

    def classify_features(self, features: Sequence[int]) -> int:
        if self.selected_feature is None or not self.rule:
            raise UntrainedModelError(self.model_name)

        value = features[self.selected_feature]
        if value in self.rule:
            return self.rule[value]

        # Unseen value: fall back to the label the rule predicts most often
        return first_argmax(count_values(self.rule.values()))

    def count_parameters(self) -> int:
        if self.selected_feature is None:
            return 0
        return len(self.rule) + 1


ModelFactory.register_model('one_rule', OneRuleClassifier)
