"""Configuration management for the classifier lab."""

import yaml
import copy
from typing import Dict, Any, Union
from pathlib import Path

from ..models.base import DEFAULT_MODELS


class Config:
    """
    YAML configuration loader.

    Sections:
        data: where to read datasets from ({file: path})
        models: entry name -> {enabled, type, ...classifier params}
        evaluation: {metrics: [...]}
        output: {output_dir, save_models, results_format}
    """

    def __init__(self, config_path: Union[str, Path, None] = None, config: Dict[str, Any] = None):
        """Load configuration from a YAML file, or wrap an existing dict."""
        self.config_path = Path(config_path) if config_path is not None else None
        if self.config_path is not None:
            with open(self.config_path, 'r') as f:
                self.config = yaml.safe_load(f) or {}
        else:
            self.config = copy.deepcopy(config) if config else {}

    def get_models_config(self) -> Dict[str, Dict[str, Any]]:
        """
        Get the models section.

        Returns:
            Deep copy of the models mapping, or the default classifier list
            when the section is missing or empty
        """
        models = self.config.get('models') or DEFAULT_MODELS
        return copy.deepcopy(models)

    def get_data_config(self) -> Dict[str, Any]:
        """Get data configuration."""
        return self.config.get('data', {})

    def get_evaluation_config(self) -> Dict[str, Any]:
        """Get evaluation configuration."""
        return self.config.get('evaluation', {})

    def get_output_config(self) -> Dict[str, Any]:
        """Get output configuration."""
        return self.config.get('output', {})

    def __getitem__(self, key: str) -> Any:
        """Allow dict-like access to config."""
        return self.config[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with default."""
        return self.config.get(key, default)
