"""
Unit tests for DecisionTreeClassifier.

Covers Gini-based split selection, tree shape, the empty-partition leaf,
feature reuse rules along paths and tree inspection helpers.
"""

import pytest

from classifier_lab.data import make_dataset
from classifier_lab.models import (
    Decision,
    DecisionTreeClassifier,
    Leaf,
    UntrainedModelError,
    gini_impurity,
)
from classifier_lab.models.decision_tree import EMPTY_LEAF_LABEL


def _paths_have_unique_features(node, used=()):
    if isinstance(node, Leaf):
        return True
    if node.feature_index in used:
        return False
    used = used + (node.feature_index,)
    return (_paths_have_unique_features(node.left, used)
            and _paths_have_unique_features(node.right, used))


@pytest.fixture
def single_feature_dataset():
    return make_dataset(
        [([0], 0), ([1], 1), ([0], 0), ([1], 1)],
        test_features=[1]
    )


class TestGiniImpurity:

    def test_pure_groups_have_zero_impurity(self, separable_dataset):
        assert gini_impurity(separable_dataset.training_data, 0) == 0.0

    def test_weighted_over_value_groups(self):
        dataset = make_dataset([([0], 0), ([0], 1), ([1], 1), ([1], 1)], test_features=[0])
        # group 0 is half/half (0.5) and weighs 0.5; group 1 is pure
        assert gini_impurity(dataset.training_data, 0) == pytest.approx(0.25)

    def test_single_mixed_group(self):
        dataset = make_dataset([([3], 0), ([3], 1), ([3], 2)], test_features=[3])
        assert gini_impurity(dataset.training_data, 0) == pytest.approx(2 / 3)


class TestTraining:

    def test_single_feature_builds_one_decision_and_two_leaves(self, single_feature_dataset):
        tree = DecisionTreeClassifier()
        tree.train(single_feature_dataset)

        assert tree.root == Decision(feature_index=0, left=Leaf(0), right=Leaf(1))
        assert tree.n_nodes() == 3
        assert tree.n_leaves() == 2
        assert tree.depth() == 1

    def test_picks_lowest_impurity_feature(self, separable_dataset):
        tree = DecisionTreeClassifier()
        tree.train(separable_dataset)

        assert tree.root.feature_index == 0
        assert tree.root.left == Leaf(0)
        assert tree.root.right == Leaf(1)

    def test_xor_needs_both_features(self, xor_dataset):
        tree = DecisionTreeClassifier()
        tree.train(xor_dataset)

        assert tree.root.feature_index == 0
        assert tree.root.left.feature_index == 1
        assert tree.root.right.feature_index == 1
        assert tree.depth() == 2
        assert tree.n_nodes() == 7

    def test_pure_training_data_is_a_single_leaf(self):
        dataset = make_dataset([([0, 1], 6), ([1, 0], 6)], test_features=[1, 1])
        tree = DecisionTreeClassifier()
        tree.train(dataset)

        assert tree.root == Leaf(6)

    def test_empty_training_data_yields_placeholder_leaf(self, empty_dataset):
        tree = DecisionTreeClassifier()
        tree.train(empty_dataset)

        assert tree.root == Leaf(EMPTY_LEAF_LABEL)
        assert EMPTY_LEAF_LABEL == 1
        assert tree.classify(empty_dataset) == 1

    def test_empty_partition_leaf_uses_placeholder_label(self):
        # Both features are constant, so every split leaves one side empty
        dataset = make_dataset([([0, 1], 0), ([0, 1], 1)], test_features=[1, 1])
        tree = DecisionTreeClassifier()
        tree.train(dataset)

        assert tree.root == Decision(
            feature_index=0,
            left=Decision(feature_index=1, left=Leaf(1), right=Leaf(0)),
            right=Leaf(1)
        )
        assert tree.classify(dataset) == 1

    def test_exhausted_features_use_majority_label(self):
        dataset = make_dataset([([1], 2), ([1], 3), ([1], 3)], test_features=[1])
        tree = DecisionTreeClassifier()
        tree.train(dataset)

        assert tree.root == Decision(feature_index=0, left=Leaf(1), right=Leaf(3))

    def test_no_feature_repeats_on_a_path(self, xor_dataset, separable_dataset):
        for dataset in (xor_dataset, separable_dataset):
            tree = DecisionTreeClassifier()
            tree.train(dataset)
            assert _paths_have_unique_features(tree.root)

    def test_training_twice_is_idempotent(self, xor_dataset):
        tree = DecisionTreeClassifier()
        tree.train(xor_dataset)
        first = tree.root
        tree.train(xor_dataset)

        assert tree.root == first


class TestClassification:

    def test_reproduces_separable_training_labels(self, single_feature_dataset, xor_dataset):
        for dataset in (single_feature_dataset, xor_dataset):
            tree = DecisionTreeClassifier()
            tree.train(dataset)
            for t in dataset.training_data:
                assert tree.classify_features(t.features) == t.label

    def test_classify_uses_test_tuple(self, xor_dataset):
        tree = DecisionTreeClassifier()
        tree.train(xor_dataset)

        assert tree.classify(xor_dataset) == 1

    def test_any_nonzero_value_goes_right(self, single_feature_dataset):
        tree = DecisionTreeClassifier()
        tree.train(single_feature_dataset)

        assert tree.classify_features([7]) == 1

    def test_classify_before_train_raises(self, xor_dataset):
        with pytest.raises(UntrainedModelError):
            DecisionTreeClassifier().classify(xor_dataset)


class TestInspection:

    def test_export_text(self, single_feature_dataset):
        tree = DecisionTreeClassifier()
        tree.train(single_feature_dataset)

        assert tree.export_text() == (
            "feature[0] == 0\n"
            "  leaf: 0\n"
            "feature[0] != 0\n"
            "  leaf: 1"
        )

    def test_export_text_before_train_raises(self):
        with pytest.raises(UntrainedModelError):
            DecisionTreeClassifier().export_text()

    def test_untrained_tree_is_empty(self):
        tree = DecisionTreeClassifier()
        assert tree.name() == "Decision Tree"
        assert tree.n_nodes() == 0
        assert tree.depth() == 0
        assert tree.count_parameters() == 0
