"""k-nearest-neighbors classifier."""

import numpy as np
from typing import Any, Dict, Optional, Sequence
from loguru import logger

from ..data import ClassificationDataset
from .base import BaseClassifier, ModelFactory, UntrainedModelError, count_values, first_argmax, safe_int


class KNNClassifier(BaseClassifier):
    """
    K-Nearest Neighbors classifier.

    Lazy learner: training keeps the samples, classification takes a
    majority vote among the k closest under Euclidean distance.

    Config:
        k: Number of neighbors (positive integer, default 1)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        k = self.config.get('k', 1)
        k_value = safe_int(k, 0)
        try:
            integral = k_value == float(k)
        except (TypeError, ValueError, OverflowError):
            integral = False
        if isinstance(k, bool) or k_value < 1 or not integral:
            raise ValueError(f"k must be a positive integer, got {k!r}")
        self._k = k_value

        self.X_train: Optional[np.ndarray] = None
        self.y_train: Optional[np.ndarray] = None

    @property
    def k(self) -> int:
        return self._k

    def name(self) -> str:
        return f"{self.k} Nearest Neighbors"

    def train(self, dataset: ClassificationDataset) -> None:
        self.X_train = dataset.feature_matrix()
        self.y_train = dataset.label_vector()
        self.fitted = len(self.y_train) > 0
        logger.info(f"{self.model_name} (k={self.k}) stored {len(self.y_train)} samples")

    def distances(self, features: Sequence[int]) -> np.ndarray:
        """
        Euclidean distance from a vector to every stored sample.

        Vectors of different lengths are compared over the shorter length.
        """
        if self.X_train is None or len(self.X_train) == 0:
            raise UntrainedModelError(self.model_name)

        query = np.asarray(features, dtype=float)
        width = min(self.X_train.shape[1], query.shape[0])
        diff = self.X_train[:, :width] - query[:width]
        return np.sqrt(np.sum(diff * diff, axis=1))

    def classify_features(self, features: Sequence[int]) -> int:
        distances = self.distances(features)

        # Stable sort keeps training order among equidistant samples
        nearest = np.argsort(distances, kind='stable')[:self.k]
        votes = count_values(int(label) for label in self.y_train[nearest])
        return first_argmax(votes)

    def count_parameters(self) -> int:
        if self.X_train is None:
            return 0
        return int(self.X_train.size)


ModelFactory.register_model('knn', KNNClassifier)
