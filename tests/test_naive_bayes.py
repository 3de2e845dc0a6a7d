"""
Unit tests for NaiveBayesClassifier.

Covers prior and conditional estimation, log-space scoring with the
unseen-value fallback, and deterministic tie-breaking.
"""

import math

import pytest

from classifier_lab.data import make_dataset
from classifier_lab.models import NaiveBayesClassifier, UntrainedModelError
from classifier_lab.utils import ModelAnalyzer


@pytest.fixture
def correlated_dataset():
    """Three tuples per class, feature 0 equals the label."""
    return make_dataset(
        [([0], 0)] * 3 + [([1], 1)] * 3,
        test_features=[1],
        test_label=1
    )


class TestTraining:

    def test_priors_of_balanced_classes(self, correlated_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(correlated_dataset)

        assert classifier.priors == {0: 0.5, 1: 0.5}

    def test_conditionals_are_normalized_per_class_and_feature(self, separable_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(separable_dataset)

        assert classifier.conditionals[0][0] == {0: 1.0}
        assert classifier.conditionals[0][1] == pytest.approx({0: 1 / 3, 1: 2 / 3})
        assert classifier.conditionals[1][1] == pytest.approx({0: 2 / 3, 1: 1 / 3})

    def test_unbalanced_priors(self):
        dataset = make_dataset([([0], 4), ([1], 4), ([1], 9)], test_features=[1])
        classifier = NaiveBayesClassifier()
        classifier.train(dataset)

        assert classifier.priors == pytest.approx({4: 2 / 3, 9: 1 / 3})
        assert list(classifier.priors) == [4, 9]

    def test_retraining_discards_previous_classes(self, correlated_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(correlated_dataset)
        classifier.train(make_dataset([([0], 7)], test_features=[0]))

        assert classifier.priors == {7: 1.0}
        assert list(classifier.conditionals) == [7]


class TestClassification:

    def test_correlated_feature_decides(self, correlated_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(correlated_dataset)

        posteriors = classifier.log_posteriors([1])
        assert posteriors[1] > posteriors[0]
        assert classifier.classify(correlated_dataset) == 1
        assert classifier.classify_features([0]) == 0

    def test_unseen_value_uses_smoothing_fallback(self, correlated_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(correlated_dataset)

        posteriors = classifier.log_posteriors([1])
        assert posteriors[0] == pytest.approx(math.log(0.5) + math.log(1 / 3))
        assert posteriors[1] == pytest.approx(math.log(0.5))

    def test_log_posterior_sums_over_features(self, separable_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(separable_dataset)

        posteriors = classifier.log_posteriors([1, 1])
        assert posteriors[0] == pytest.approx(math.log(0.5) + math.log(1 / 3) + math.log(2 / 3))
        assert posteriors[1] == pytest.approx(math.log(0.5) + math.log(1.0) + math.log(1 / 3))
        assert classifier.classify(separable_dataset) == 1

    def test_equal_posteriors_go_to_first_label(self):
        dataset = make_dataset([([0], 1), ([0], 0)], test_features=[0])
        classifier = NaiveBayesClassifier()
        classifier.train(dataset)

        assert classifier.classify(dataset) == 1

    def test_training_twice_is_idempotent(self, separable_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(separable_dataset)
        first = classifier.log_posteriors([0, 1])
        classifier.train(separable_dataset)

        assert classifier.log_posteriors([0, 1]) == first

    def test_classify_before_train_raises(self, correlated_dataset):
        with pytest.raises(UntrainedModelError):
            NaiveBayesClassifier().classify(correlated_dataset)

    def test_empty_training_data_raises_on_classify(self, empty_dataset):
        classifier = NaiveBayesClassifier()
        classifier.train(empty_dataset)

        with pytest.raises(UntrainedModelError):
            classifier.classify(empty_dataset)

    def test_empty_training_data_cannot_be_saved(self, empty_dataset, tmp_path):
        classifier = NaiveBayesClassifier()
        classifier.train(empty_dataset)

        assert ModelAnalyzer.summarize(classifier)["fitted"] is False
        with pytest.raises(UntrainedModelError):
            classifier.save(str(tmp_path / "bayes"))


def test_name_and_parameter_count(correlated_dataset):
    classifier = NaiveBayesClassifier()
    assert classifier.name() == "Naive Bayes"

    classifier.train(correlated_dataset)
    # two priors plus one conditional entry per class
    assert classifier.count_parameters() == 4
