"""
Classifier Lab Runner
=====================

Trains every configured classifier on every dataset, reports the predicted
labels, scores them against known test labels and saves the results.

"""
import argparse
import json
import logging
import sys
import time
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .data import ClassificationDataset, DatasetLoader
from .metrics import MetricsWrapper
from .models import ModelFactory
from .utils import Config, ModelAnalyzer

logger = logging.getLogger(__name__)

DEFAULT_METRICS = ['accuracy', 'balanced_accuracy', 'f1']


class LabRunner:
    """Runs the configured classifiers over a list of datasets."""

    def __init__(self, config: Union[str, Path, Dict[str, Any]], project_root: Optional[Path] = None):
        """
        Initialize runner.

        Args:
            config: Path to a YAML config file, or an already-loaded config dict
            project_root: Base directory for relative data and output paths
        """
        if isinstance(config, dict):
            self.config = Config(config=config)
            config_name = 'lab'
        else:
            self.config = Config(config)
            config_name = Path(config).stem

        self.project_root = Path(project_root) if project_root is not None else Path('.')
        self.experiment_name = f"{config_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        self.classifiers = {}
        self.results = {}
        self.output_dir = None

        logger.info(f"Initialized runner - Experiment: {self.experiment_name}")

    def run(self, datasets: Optional[Sequence[ClassificationDataset]] = None) -> Dict[str, Dict[str, Any]]:
        """
        Execute the full evaluation.

        Args:
            datasets: Datasets to use; read from the configured file when omitted

        Returns:
            Per-classifier results keyed by config entry name
        """
        logger.info("=" * 60)
        logger.info("CLASSIFIER LAB")
        logger.info("=" * 60)

        try:
            if datasets is None:
                datasets = self._load_datasets()
            self.classifiers = ModelFactory.create_models(self.config.get_models_config())

            self._evaluate_models(list(datasets))
            self._save_results()
            self._print_summary()

        except Exception as e:
            logger.error(f"Run failed: {str(e)}", exc_info=True)
            raise

        return self.results

    def _load_datasets(self) -> List[ClassificationDataset]:
        data_config = self.config.get_data_config()
        if 'file' not in data_config:
            raise ValueError("Config requires data.file")
        return DatasetLoader().load(self.project_root / data_config['file'])

    def _evaluate_models(self, datasets: List[ClassificationDataset]) -> None:
        """Train and classify every dataset with every classifier."""
        logger.info(f"Evaluating {len(self.classifiers)} classifiers on {len(datasets)} datasets")

        metrics_names = self.config.get_evaluation_config().get('metrics', DEFAULT_METRICS)

        for idx, (entry_name, model) in enumerate(self.classifiers.items(), 1):
            logger.info(f"[{idx}/{len(self.classifiers)}] {entry_name}: {model.name()}")
            print(model.name())

            start_time = time.time()
            predictions, test_labels, train_accuracy = [], [], []
            try:
                for dataset in datasets:
                    model.train(dataset)
                    label = model.classify(dataset)
                    print(label)

                    predictions.append(label)
                    test_labels.append(dataset.test_data.label)
                    if dataset.training_data:
                        train_accuracy.append(MetricsWrapper.get_eval_metrics(
                            'accuracy', dataset.label_vector(), model.predict(dataset.training_data)
                        ))
            except Exception as e:
                logger.error(f"  ✗ {entry_name} failed: {str(e)}")
                logger.debug(f"Traceback:\n{traceback.format_exc()}")
                self.results[entry_name] = {'name': model.name(), 'error': str(e)}
                continue

            result = {
                'name': model.name(),
                'predictions': predictions,
                'test_labels': test_labels,
                'train_accuracy': float(np.mean(train_accuracy)) if train_accuracy else np.nan,
                'total_parameters': ModelAnalyzer.count_parameters(model),
                'training_time': time.time() - start_time,
            }

            if predictions and all(label is not None for label in test_labels):
                scores = MetricsWrapper.get_eval_metrics(metrics_names, test_labels, predictions)
                result.update({f"test_{name}": value for name, value in scores.items()})
            else:
                logger.debug(f"{entry_name}: test labels incomplete, skipping scoring")

            self.results[entry_name] = result
            logger.info(f"  ✓ Complete - Predictions: {predictions}")

    def _save_results(self) -> None:
        """Write results and trained models under the output directory."""
        output_config = self.config.get_output_config()
        results_format = output_config.get('results_format', 'both')
        save_models = output_config.get('save_models', False)
        if results_format == 'none' and not save_models:
            return

        self.output_dir = self.project_root / output_config.get('output_dir', 'results') / self.experiment_name
        self.output_dir.mkdir(parents=True, exist_ok=True)

        if results_format in ['json', 'both']:
            with open(self.output_dir / 'results.json', 'w') as f:
                json.dump(self.results, f, indent=2, default=_to_serializable)

        if results_format in ['csv', 'both']:
            rows = []
            for entry_name, metrics in self.results.items():
                row = {'model': entry_name}
                row.update({k: v for k, v in metrics.items() if not isinstance(v, (list, dict))})
                rows.append(row)
            pd.DataFrame(rows).to_csv(self.output_dir / 'results.csv', index=False)

            predictions = {
                entry_name: metrics['predictions']
                for entry_name, metrics in self.results.items() if 'error' not in metrics
            }
            if predictions:
                frame = pd.DataFrame(predictions)
                frame.index.name = 'dataset'
                frame.to_csv(self.output_dir / 'predictions.csv')

        if save_models:
            models_dir = self.output_dir / 'models'
            for entry_name, model in self.classifiers.items():
                if 'error' in self.results.get(entry_name, {}):
                    continue
                model.save(str(models_dir / f"{entry_name}.joblib"))

        logger.info(f"Results saved to {self.output_dir}")

    def _print_summary(self) -> None:
        logger.info("=" * 60)
        logger.info("SUMMARY")
        logger.info("=" * 60)

        successful = [k for k, v in self.results.items() if 'error' not in v]
        failed = [k for k, v in self.results.items() if 'error' in v]
        logger.info(f"Classifiers completed: {len(successful)}/{len(self.results)}")

        ranked = sorted(
            successful,
            key=lambda k: _sort_value(self.results[k].get('test_accuracy')),
            reverse=True
        )
        for i, entry_name in enumerate(ranked, 1):
            metrics = self.results[entry_name]
            accuracy = metrics.get('test_accuracy')
            accuracy_str = f"{accuracy:.4f}" if accuracy is not None else "N/A"
            logger.info(
                f"  {i}. {metrics['name']:<24} test accuracy: {accuracy_str}, "
                f"train accuracy: {metrics['train_accuracy']:.4f}, "
                f"params: {metrics['total_parameters']}"
            )

        if failed:
            logger.info(f"Failed classifiers: {', '.join(failed)}")


def _sort_value(value: Optional[float]) -> float:
    if value is None or np.isnan(value):
        return float('-inf')
    return value


def _to_serializable(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(
        description="Train and compare classic classifiers on JSON datasets"
    )
    parser.add_argument(
        'config',
        type=str,
        help='Path to configuration file (YAML)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    config_path = Path(args.config)
    if not config_path.exists():
        logger.error(f"Configuration file not found: {args.config}")
        return 1

    try:
        LabRunner(config_path).run()
        return 0
    except Exception as e:
        logger.error(f"Run failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
