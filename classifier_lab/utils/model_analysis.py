"""
Model Analysis Utilities
========================

Provides parameter counting and a short summary of trained classifiers.

"""

from typing import Any, Dict


class ModelAnalyzer:
    """Analyze classifier size."""

    @staticmethod
    def count_parameters(model: Any) -> int:
        """
        Count the learned entries of a classifier.

        One-rule: rule entries plus the selected feature. Naive Bayes: priors
        plus conditional entries. k-NN: stored feature values. Decision tree:
        nodes.

        Args:
            model: The classifier to analyze

        Returns:
            Number of learned entries, 0 for objects that do not report one
        """
        if hasattr(model, 'count_parameters'):
            return int(model.count_parameters())
        return 0

    @staticmethod
    def summarize(model: Any) -> Dict[str, Any]:
        """Name, class, fitted flag and parameter count of a classifier."""
        return {
            'name': model.name(),
            'class': type(model).__name__,
            'fitted': bool(getattr(model, 'fitted', False)),
            'total_parameters': ModelAnalyzer.count_parameters(model),
        }
