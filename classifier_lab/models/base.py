"""Base classifier interface and factory.

This module provides the foundation for all classifiers in the lab.
It includes the abstract base class every algorithm implements, the error
raised when a classifier is used before training, and a factory that builds
classifier instances by name or from the ``models`` section of a config.

Key Components:
    - BaseClassifier: Abstract base class for all classifiers
    - UntrainedModelError: Raised by classify/save before training
    - ModelFactory: Factory for classifier creation and registration
"""

from abc import ABC, abstractmethod
import copy
import numpy as np
from typing import Any, Dict, Iterable, List, Optional, Sequence
from loguru import logger
from pathlib import Path
import joblib

from ..data import ClassificationDataset, DataTuple


class UntrainedModelError(ValueError):
    """Raised when a classifier is used before it has been trained."""

    def __init__(self, model_name: str):
        super().__init__(f"{model_name} has not been trained")
        self.model_name = model_name


def safe_int(value: Any, default: int) -> int:
    """
    Safely convert value to integer.

    Handles strings with scientific notation, floats and None values.
    Returns default if conversion fails.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Converted integer value or default
    """
    if value is None:
        return default
    try:
        return int(float(str(value)))
    except (TypeError, ValueError, OverflowError):
        return default


def count_values(values: Iterable[int]) -> Dict[int, int]:
    """Occurrence counts keyed in first-seen order."""
    counts = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def first_argmax(scores: Dict[Any, float]) -> Any:
    """
    Key with the highest score.

    Ties go to the key that comes first in the mapping's iteration order.

    Raises:
        ValueError: If scores is empty
    """
    best_key, best_score = None, None
    for key, score in scores.items():
        if best_score is None or score > best_score:
            best_key, best_score = key, score
    if best_score is None:
        raise ValueError("Cannot select from an empty mapping")
    return best_key


class BaseClassifier(ABC):
    """
    Abstract base class for all classifiers.

    Provides the train/classify/name contract shared by every algorithm,
    plus persistence of the trained state.

    Attributes:
        config: Configuration dictionary for the classifier
        fitted: Whether training produced usable state
        model_name: Name of the classifier class
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize base classifier.

        Args:
            config: Classifier configuration dictionary containing
                   hyperparameters specific to each algorithm
        """
        self.config = config or {}
        self.fitted = False
        self.model_name = self.__class__.__name__

    @abstractmethod
    def train(self, dataset: ClassificationDataset) -> None:
        """
        Train on the dataset's training tuples.

        Replaces any previously trained state.

        Args:
            dataset: Dataset whose training portion is consumed
        """
        pass

    @abstractmethod
    def classify_features(self, features: Sequence[int]) -> int:
        """
        Predict the label of a single feature vector.

        Raises:
            UntrainedModelError: If the classifier holds no trained state
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """Human-readable algorithm name used in reports."""
        pass

    def classify(self, dataset: ClassificationDataset) -> int:
        """
        Classify the dataset's test tuple.

        Args:
            dataset: Dataset whose test tuple is classified

        Returns:
            Predicted integer label
        """
        return self.classify_features(dataset.test_data.features)

    def predict(self, tuples: Iterable[DataTuple]) -> np.ndarray:
        """
        Predict labels for several tuples.

        Args:
            tuples: Tuples to classify

        Returns:
            Predicted labels of shape (n_tuples,)
        """
        return np.array([self.classify_features(t.features) for t in tuples], dtype=int)

    def count_parameters(self) -> int:
        """Size of the learned state; 0 when untrained."""
        return 0

    def save(self, filepath: str) -> Path:
        """
        Save trained classifier to disk.

        Args:
            filepath: Path where the classifier should be saved

        Returns:
            Path of the written file

        Raises:
            UntrainedModelError: If the classifier has not been trained
        """
        if not self.fitted:
            raise UntrainedModelError(self.model_name)

        filepath = Path(filepath).with_suffix('.joblib')
        filepath.parent.mkdir(parents=True, exist_ok=True)
        metadata = {
            'model_name': self.model_name,
            'config': self.config,
            'fitted': self.fitted,
            'state': copy.deepcopy(vars(self))
        }
        joblib.dump(metadata, filepath)
        logger.info(f"Saved {self.model_name}: {filepath}")
        return filepath

    def load(self, filepath: str) -> None:
        """
        Load a trained classifier from disk into this instance.

        Args:
            filepath: Path to the saved classifier file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file holds another classifier type or an
                        untrained classifier
        """
        filepath = Path(filepath).with_suffix('.joblib')
        if not filepath.exists():
            raise FileNotFoundError(f"Model file not found: {filepath}")

        metadata = joblib.load(filepath)
        if metadata.get('model_name') != self.model_name:
            raise ValueError(
                f"Cannot load {metadata.get('model_name')} into {self.model_name}"
            )
        if not metadata.get('fitted', False):
            raise ValueError("Cannot load unfitted model")

        vars(self).update(metadata['state'])
        logger.info(f"Loaded {self.model_name}: {filepath}")

    def __repr__(self) -> str:
        return f"{self.model_name}(name={self.name()!r}, fitted={self.fitted})"


# ============================================================================
# FACTORY
# ============================================================================

DEFAULT_MODELS = {
    'one_rule': {'enabled': True},
    'naive_bayes': {'enabled': True},
    'decision_tree': {'enabled': True},
    'knn_1': {'enabled': True, 'k': 1},
    'knn_4': {'enabled': True, 'k': 4},
}


class ModelFactory:
    """
    Factory class for creating and managing classifier instances.

    Classifiers register under a short name and can then be created by that
    name, or in bulk from the ``models`` section of a configuration file.
    """

    _models = {}

    @classmethod
    def register_model(cls, name: str, model_class: type) -> None:
        """
        Register a classifier class with the factory.

        Args:
            name: Name to register the classifier under
            model_class: Class that inherits from BaseClassifier
        """
        cls._models[name] = model_class

    @classmethod
    def create_model(cls, name: str, config: Optional[Dict[str, Any]] = None, **kwargs) -> BaseClassifier:
        """
        Create a classifier instance by name.

        Args:
            name: Registered name of the classifier
            config: Configuration dictionary for the classifier
            **kwargs: Additional keyword arguments merged into config

        Returns:
            Instantiated classifier

        Raises:
            ValueError: If the name is not registered
        """
        if name not in cls._models:
            raise ValueError(f"Unknown model: {name}")

        full_config = {**(config or {}), **kwargs}
        return cls._models[name](config=full_config)

    @classmethod
    def create_models(cls, models_config: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, BaseClassifier]:
        """
        Create every enabled classifier of a ``models`` config section.

        Each entry maps a unique name to its settings. The registered type is
        taken from ``type`` when present, otherwise resolved from the entry
        name, so ``knn_4`` builds a ``knn`` classifier.

        Args:
            models_config: Mapping of entry name to settings; defaults to
                           DEFAULT_MODELS

        Returns:
            Mapping of entry name to classifier, in config order

        Raises:
            ValueError: If an entry's type cannot be resolved
        """
        if models_config is None:
            models_config = DEFAULT_MODELS

        models = {}
        for entry_name, entry in models_config.items():
            entry = dict(entry or {})
            if not entry.pop('enabled', True):
                logger.debug(f"Skipping disabled model {entry_name}")
                continue

            model_type = entry.pop('type', None) or cls.resolve_model_name(entry_name)
            if model_type is None:
                raise ValueError(f"Unknown model: {entry_name}")

            models[entry_name] = cls.create_model(model_type, config=entry)
            logger.debug(f"Created {entry_name} as {model_type} with {entry}")

        return models

    @classmethod
    def list_models(cls) -> List[str]:
        """
        Get list of all registered classifier names.

        Returns:
            List of registered names
        """
        return list(cls._models.keys())

    @classmethod
    def resolve_model_name(cls, model_name: str) -> Optional[str]:
        """
        Resolve an entry name to a registered name.

        Tries an exact match first, then a prefix or partial match.

        Args:
            model_name: Name to resolve

        Returns:
            Registered name or None if no match found
        """
        if model_name in cls._models:
            return model_name

        for registered in cls._models:
            if model_name.startswith(registered) or registered in model_name:
                return registered

        return None
