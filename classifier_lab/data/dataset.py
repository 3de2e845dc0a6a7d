"""
Dataset Records
===============

Immutable records for labeled feature vectors and train/test dataset pairs.

"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class DataTuple:
    """A feature vector with an optional class label."""
    features: Tuple[int, ...]
    label: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'features', tuple(self.features))

    @property
    def n_features(self) -> int:
        return len(self.features)

    @property
    def target(self) -> int:
        """Label used by the learners; an absent label counts as 0."""
        return self.label if self.label is not None else 0


@dataclass(frozen=True)
class ClassificationDataset:
    """
    Training tuples paired with the single tuple to classify.

    Attributes:
        training_data: Labeled tuples, all of the same length
        test_data: Tuple to be classified (label optional)
    """
    training_data: Tuple[DataTuple, ...]
    test_data: DataTuple

    def __post_init__(self):
        object.__setattr__(self, 'training_data', tuple(self.training_data))

    @property
    def n_features(self) -> int:
        if self.training_data:
            return self.training_data[0].n_features
        return self.test_data.n_features

    @property
    def labels(self) -> List[int]:
        """Distinct training targets in first-seen order."""
        return list(dict.fromkeys(t.target for t in self.training_data))

    def feature_matrix(self) -> np.ndarray:
        """Training features as an (n_samples, n_features) array."""
        if not self.training_data:
            return np.empty((0, self.n_features), dtype=float)
        return np.array([t.features for t in self.training_data], dtype=float)

    def label_vector(self) -> np.ndarray:
        """Training targets as a 1-D integer array."""
        return np.array([t.target for t in self.training_data], dtype=int)


def make_dataset(rows: Sequence[Tuple[Sequence[int], Optional[int]]],
                 test_features: Sequence[int],
                 test_label: Optional[int] = None) -> ClassificationDataset:
    """Build a dataset from (features, label) pairs and a test vector."""
    return ClassificationDataset(
        training_data=tuple(DataTuple(features, label) for features, label in rows),
        test_data=DataTuple(test_features, test_label)
    )
