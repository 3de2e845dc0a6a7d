"""
Shared pytest fixtures for test suite.
"""

import pytest

from classifier_lab.data import make_dataset


@pytest.fixture
def separable_dataset():
    """Feature 0 decides the label, feature 1 is noise."""
    return make_dataset(
        [
            ([0, 0], 0),
            ([0, 1], 0),
            ([1, 0], 1),
            ([1, 1], 1),
            ([0, 1], 0),
            ([1, 0], 1),
        ],
        test_features=[1, 1],
        test_label=1
    )


@pytest.fixture
def xor_dataset():
    """Label is the XOR of two binary features."""
    return make_dataset(
        [
            ([0, 0], 0),
            ([0, 1], 1),
            ([1, 0], 1),
            ([1, 1], 0),
        ],
        test_features=[1, 0]
    )


@pytest.fixture
def empty_dataset():
    """No training tuples, one query."""
    return make_dataset([], test_features=[0, 1])


@pytest.fixture
def dataset_records():
    """Parsed JSON content of a two-dataset file."""
    return [
        {
            "training_data": [
                {"Q": [0, 0, 1], "S": 0},
                {"Q": [1, 0, 1], "S": 1},
                {"Q": [1, 1, 0], "S": 1},
            ],
            "test_data": {"Q": [1, 1, 1], "S": 1},
        },
        {
            "training_data": [
                {"Q": [1, 0], "S": 2},
                {"Q": [0, 1], "S": 3},
            ],
            "test_data": {"Q": [0, 1]},
        },
    ]
