"""Utility modules for the classifier lab."""

from .model_analysis import ModelAnalyzer
from .config import Config

__all__ = ['ModelAnalyzer', 'Config']
