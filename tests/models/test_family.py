"""
Tests for Family resolution and binomial label helpers.
"""
from types import SimpleNamespace

import numpy as np
import pytest

from sl_learners.models.family import Family, binary_indicator, positive_class_index


class TestFamilyResolve:
    """Tests for Family.resolve."""

    @pytest.mark.parametrize("value", ["gaussian", "GAUSSIAN", " Gaussian "])
    def test_resolves_strings(self, value):
        assert Family.resolve(value) is Family.GAUSSIAN

    def test_resolves_member(self):
        assert Family.resolve(Family.BINOMIAL) is Family.BINOMIAL

    def test_resolves_family_like_object(self):
        """Objects exposing a 'family' attribute resolve by that attribute."""
        family = SimpleNamespace(family="binomial", link="logit")
        assert Family.resolve(family) is Family.BINOMIAL

    def test_resolves_mapping(self):
        assert Family.resolve({"family": "gaussian"}) is Family.GAUSSIAN

    def test_unknown_family_raises(self):
        with pytest.raises(ValueError, match="Unknown family"):
            Family.resolve("poisson")

    def test_is_classification(self):
        assert Family.BINOMIAL.is_classification is True
        assert Family.GAUSSIAN.is_classification is False

    def test_str(self):
        assert str(Family.GAUSSIAN) == "gaussian"


class TestPositiveClass:
    """Tests for positive class identification."""

    def test_numeric_one(self):
        assert positive_class_index(np.array([0, 1])) == 1

    def test_string_one(self):
        assert positive_class_index(np.array(["0", "1"])) == 1

    def test_boolean_true(self):
        assert positive_class_index(np.array([False, True])) == 1

    def test_one_first(self):
        assert positive_class_index(np.array([1, 2])) == 0

    def test_two_levels_without_one_uses_second(self):
        assert positive_class_index(np.array(["no", "yes"])) == 1

    def test_many_levels_without_one_raises(self):
        with pytest.raises(ValueError, match="positive class"):
            positive_class_index(np.array(["a", "b", "c"]))

    def test_binary_indicator(self):
        y = np.array(["no", "yes", "yes", "no"])
        np.testing.assert_array_equal(binary_indicator(y), [0.0, 1.0, 1.0, 0.0])

    def test_binary_indicator_single_level(self):
        np.testing.assert_array_equal(binary_indicator(np.array([0, 0, 0])), [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(binary_indicator(np.array(["1", "1"])), [1.0, 1.0])
        np.testing.assert_array_equal(binary_indicator(np.array(["no", "no"])), [0.0, 0.0])
