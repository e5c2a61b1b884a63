"""
Tests for LearnerRegistry - Plugin system for base learners.

Tests cover:
- Learner registration with decorator
- Learner creation via registry
- Alias resolution
- Unknown learner error handling
- Registry management (clear, count)
"""
import numpy as np
import pytest

from sl_learners.models.base import BaseLearner, LearnerFit, LearnerOutput
from sl_learners.models.classical import ExtraTreesLearner, MeanLearner
from sl_learners.models.registry import LearnerRegistry, register


# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def isolate_registry():
    """
    Store and restore registry state around each test.

    This ensures tests don't pollute each other with registered learners.
    """
    original_learners = LearnerRegistry._learners.copy()
    original_categories = {k: list(v) for k, v in LearnerRegistry._categories.items()}
    original_metadata = {k: v.copy() for k, v in LearnerRegistry._metadata.items()}

    yield

    LearnerRegistry._learners = original_learners
    LearnerRegistry._categories = {k: list(v) for k, v in original_categories.items()}
    LearnerRegistry._metadata = {k: v.copy() for k, v in original_metadata.items()}


@pytest.fixture
def mock_learner_class():
    """Create a mock learner class for testing registration."""
    class MockLearner(BaseLearner):
        name = "mock_learner"

        def get_default_config(self):
            return {"param": 1}

        def fit(self, Y, X, new_x=None, family="gaussian", obs_weights=None, id=None, **params):
            fit = LearnerFit(object=0.0, family=family, learner=self.name)
            return LearnerOutput(pred=np.zeros(len(Y)), fit=fit)

        def predict(self, fit, newdata, family=None):
            return np.zeros(len(newdata))

    return MockLearner


# =============================================================================
# BUILT-IN LEARNERS
# =============================================================================

class TestBuiltinLearners:
    """Learners shipped with the package register on import."""

    def test_extra_trees_registered(self):
        assert LearnerRegistry.is_registered("extra_trees")
        assert LearnerRegistry.get("extra_trees") is ExtraTreesLearner

    def test_mean_registered(self):
        assert LearnerRegistry.get("mean") is MeanLearner

    @pytest.mark.parametrize("alias", ["et", "ExtraTrees", " EXTRA_TREES "])
    def test_aliases_case_insensitive(self, alias):
        assert LearnerRegistry.get(alias) is ExtraTreesLearner

    def test_alias_metadata_is_canonical(self):
        meta = LearnerRegistry.get_metadata("et")
        assert meta["name"] == "extra_trees"
        assert meta["category"] == "classical"

    def test_list_all_excludes_aliases(self):
        names = LearnerRegistry.list_all()
        assert "extra_trees" in names
        assert "mean" in names
        assert "et" not in names

    def test_create_with_config(self):
        learner = LearnerRegistry.create("extra_trees", config={"ntree": 7})
        assert isinstance(learner, ExtraTreesLearner)
        assert learner.config["ntree"] == 7

    def test_classical_category(self):
        assert {"extra_trees", "mean"} <= set(LearnerRegistry.list_category("classical"))


# =============================================================================
# REGISTRATION
# =============================================================================

class TestRegistration:
    """Tests for the @register decorator."""

    def test_register_and_create(self, mock_learner_class):
        register("mock_learner", category="test", aliases=["mock"])(mock_learner_class)

        learner = LearnerRegistry.create("mock")
        assert isinstance(learner, mock_learner_class)
        assert learner.config == {"param": 1}
        assert "test" in LearnerRegistry.categories()

    def test_duplicate_name_raises(self, mock_learner_class):
        register("mock_learner", category="test")(mock_learner_class)
        with pytest.raises(ValueError, match="already registered"):
            register("mock_learner", category="test")(mock_learner_class)

    def test_non_learner_raises(self):
        class NotALearner:
            pass

        with pytest.raises(TypeError, match="subclass of BaseLearner"):
            register("broken", category="test")(NotALearner)

    def test_duplicate_alias_skipped(self, mock_learner_class, caplog):
        register("mock_learner", category="test", aliases=["mean"])(mock_learner_class)
        assert LearnerRegistry.get("mean") is MeanLearner
        assert "already registered" in caplog.text

    def test_unknown_learner_raises(self):
        with pytest.raises(ValueError, match="Unknown learner"):
            LearnerRegistry.create("does_not_exist")

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError, match="Unknown category"):
            LearnerRegistry.list_category("does_not_exist")

    def test_count_and_clear(self, mock_learner_class):
        before = LearnerRegistry.count()
        register("mock_learner", category="test")(mock_learner_class)
        assert LearnerRegistry.count() == before + 1

        LearnerRegistry.clear()
        assert LearnerRegistry.count() == 0
        assert LearnerRegistry.list_learners() == {}
