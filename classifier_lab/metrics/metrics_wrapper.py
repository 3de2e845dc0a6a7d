import logging
import numpy as np
from typing import Union, List, Dict, Optional, Sequence
from sklearn.metrics import (
    accuracy_score, precision_score, recall_score, f1_score,
    matthews_corrcoef, balanced_accuracy_score, cohen_kappa_score
)

logger = logging.getLogger(__name__)


class MetricsWrapper:
    """
    A metrics wrapper for classification evaluation.

    Provides a unified interface over scikit-learn metrics for hard label
    predictions.
    """

    METRICS = {
        'accuracy': accuracy_score,
        'balanced_accuracy': balanced_accuracy_score,
        'f1': lambda y_t, y_p: f1_score(y_t, y_p, average='weighted', zero_division=0),
        'f1_macro': lambda y_t, y_p: f1_score(y_t, y_p, average='macro', zero_division=0),
        'precision': lambda y_t, y_p: precision_score(y_t, y_p, average='weighted', zero_division=0),
        'recall': lambda y_t, y_p: recall_score(y_t, y_p, average='weighted', zero_division=0),
        'matthews_corrcoef': matthews_corrcoef,
        'cohen_kappa': cohen_kappa_score,
    }

    @staticmethod
    def get_eval_metrics(metrics_names: Union[str, List[str], None] = None,
                         y_true: Optional[Sequence[int]] = None,
                         y_pred: Optional[Sequence[int]] = None) -> Union[Dict[str, float], float, None]:
        """
        Compute metric scores.

        Args:
            metrics_names: Metric name(s) to compute. If None, computes all metrics.
            y_true: True labels. If None, nothing is computed.
            y_pred: Predicted labels. Required if y_true provided.

        Returns:
            Single float for a single metric name, dict of scores otherwise,
            None when y_true is missing.

        Raises:
            ValueError: If a metric name is unknown

        Examples:
            >>> MetricsWrapper.get_eval_metrics('accuracy', [0, 1], [0, 1])
            1.0
        """
        if y_true is None:
            return None

        is_single_metric = isinstance(metrics_names, str)
        if metrics_names is None:
            names = list(MetricsWrapper.METRICS)
        elif is_single_metric:
            names = [metrics_names]
        else:
            names = list(metrics_names)

        unknown = [name for name in names if name not in MetricsWrapper.METRICS]
        if unknown:
            raise ValueError(f"Metric '{unknown[0]}' not found. "
                             f"Available metrics: {list(MetricsWrapper.METRICS.keys())}")

        y_t = np.asarray(y_true, dtype=int)
        y_p = np.asarray(y_pred, dtype=int)

        results = {}
        for name in names:
            try:
                results[name] = float(MetricsWrapper.METRICS[name](y_t, y_p))
            except ValueError as e:
                logger.warning(f"Could not compute {name}: {e}")
                results[name] = np.nan

        if is_single_metric:
            return results[metrics_names]

        return results
