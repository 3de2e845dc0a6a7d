#!/usr/bin/env python3
"""
Classifier Lab
==============

Trains the classifiers listed in a YAML config on every dataset of a JSON
file and prints each classifier's name followed by its predicted labels.

Usage:
    python scripts/run_lab.py configs/default.yaml [--debug]
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from classifier_lab.runner import main


if __name__ == "__main__":
    sys.exit(main())
