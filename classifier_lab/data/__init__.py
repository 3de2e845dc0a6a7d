"""Data handling module."""

from .dataset import DataTuple, ClassificationDataset, make_dataset
from .loader import DatasetLoader, DatasetFormatError

__all__ = [
    "DataTuple",
    "ClassificationDataset",
    "make_dataset",
    "DatasetLoader",
    "DatasetFormatError"
]
