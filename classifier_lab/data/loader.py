"""Data loading utilities for classification datasets."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from loguru import logger

from .dataset import ClassificationDataset, DataTuple


class DatasetFormatError(ValueError):
    """Raised when a dataset file does not have the expected structure."""


class DatasetLoader:
    """Reads classification datasets from JSON files."""

    TRAINING_KEY = 'training_data'
    TEST_KEY = 'test_data'
    FEATURES_KEY = 'Q'
    LABEL_KEY = 'S'

    def load(self, file_path: Union[str, Path]) -> List[ClassificationDataset]:
        """
        Load every dataset stored in a JSON file.

        Expected format:
            [
              {"training_data": [{"Q": [0, 1, 1], "S": 1}, ...],
               "test_data": {"Q": [1, 0, 1]}},
              ...
            ]

        Args:
            file_path: Path to the JSON file

        Returns:
            List of datasets in file order

        Raises:
            FileNotFoundError: If the file does not exist
            DatasetFormatError: If the content is malformed
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        with open(file_path, 'r') as f:
            try:
                records = json.load(f)
            except json.JSONDecodeError as e:
                raise DatasetFormatError(f"Invalid JSON in {file_path}: {e}") from e

        datasets = self.from_records(records)
        logger.info(f"Loaded {len(datasets)} datasets from {file_path}")
        return datasets

    def from_records(self, records: Any) -> List[ClassificationDataset]:
        """Build datasets from already-parsed JSON records."""
        if not isinstance(records, list):
            raise DatasetFormatError("Expected a list of datasets at the top level")

        datasets = []
        for idx, record in enumerate(records):
            dataset = self._parse_dataset(record, idx)
            logger.debug(f"Dataset {idx}: {len(dataset.training_data)} training tuples, "
                         f"{dataset.n_features} features")
            datasets.append(dataset)
        return datasets

    def _parse_dataset(self, record: Dict[str, Any], idx: int) -> ClassificationDataset:
        if not isinstance(record, dict):
            raise DatasetFormatError(f"Dataset {idx}: expected an object")
        if self.TRAINING_KEY not in record or self.TEST_KEY not in record:
            raise DatasetFormatError(
                f"Dataset {idx}: requires '{self.TRAINING_KEY}' and '{self.TEST_KEY}'"
            )

        raw_training = record[self.TRAINING_KEY]
        if not isinstance(raw_training, list) or not raw_training:
            raise DatasetFormatError(f"Dataset {idx}: training data must be a non-empty list")

        training = [self._parse_tuple(item, f"Dataset {idx} training[{i}]")
                    for i, item in enumerate(raw_training)]
        test = self._parse_tuple(record[self.TEST_KEY], f"Dataset {idx} test")

        n_features = training[0].n_features
        lengths = {t.n_features for t in training}
        if len(lengths) > 1:
            raise DatasetFormatError(
                f"Dataset {idx}: training tuples have different lengths {sorted(lengths)}"
            )
        if test.n_features != n_features:
            raise DatasetFormatError(
                f"Dataset {idx}: test tuple has {test.n_features} features, expected {n_features}"
            )

        return ClassificationDataset(training_data=training, test_data=test)

    def _parse_tuple(self, item: Any, where: str) -> DataTuple:
        if not isinstance(item, dict) or self.FEATURES_KEY not in item:
            raise DatasetFormatError(f"{where}: missing '{self.FEATURES_KEY}'")

        features = item[self.FEATURES_KEY]
        if not isinstance(features, list) or not all(_is_int(v) for v in features):
            raise DatasetFormatError(f"{where}: features must be a list of integers")
        if any(v < 0 for v in features):
            raise DatasetFormatError(f"{where}: features must be non-negative")

        label: Optional[int] = item.get(self.LABEL_KEY)
        if label is not None and not _is_int(label):
            raise DatasetFormatError(f"{where}: label must be an integer")

        return DataTuple(features, label)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
