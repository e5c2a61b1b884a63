"""
Tests for learner configuration loading, merging and validation.
"""
from pathlib import Path

import pytest
import yaml

from sl_learners.models.config import (
    CONFIG_DIR,
    ConfigError,
    ConfigValidationError,
    build_learner_config,
    find_learner_config,
    flatten_learner_config,
    load_learner_config,
    load_yaml_config,
    merge_configs,
    validate_learner_config,
)


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestLoadYaml:
    """Tests for load_yaml_config."""

    def test_load(self, tmp_path):
        path = _write_yaml(tmp_path / "et.yaml", {"defaults": {"ntree": 10}})
        assert load_yaml_config(path) == {"defaults": {"ntree": 10}}

    def test_missing_file_auto_discovery(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "missing.yaml")

    def test_missing_file_explicit(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml_config(tmp_path / "missing.yaml", explicit=True)

    def test_invalid_yaml_explicit(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("defaults: [unclosed")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_yaml_config(path, explicit=True)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_non_mapping_raises(self, tmp_path):
        path = _write_yaml(tmp_path / "list.yaml", [1, 2, 3])
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_yaml_config(path)


class TestLearnerConfig:
    """Tests for learner config discovery and flattening."""

    def test_flatten(self):
        config = {
            "learner": {"name": "extra_trees", "category": "classical"},
            "defaults": {"ntree": 100},
            "random_state": 3,
        }
        assert flatten_learner_config(config) == {"ntree": 100, "random_state": 3}

    def test_shipped_extra_trees_config(self):
        assert find_learner_config("extra_trees") == CONFIG_DIR / "extra_trees.yaml"
        config = load_learner_config("extra_trees")
        assert config["ntree"] == 500
        assert "mtry" not in config

    def test_find_missing(self, tmp_path):
        assert find_learner_config("extra_trees", config_dir=tmp_path) is None

    def test_load_missing_explicit(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_learner_config("extra_trees", config_dir=tmp_path, explicit=True)


class TestBuildConfig:
    """Tests for merge precedence."""

    def test_merge_configs_deep(self):
        base = {"a": 1, "nested": {"x": 1, "y": 2}}
        merged = merge_configs(base, {"nested": {"y": 3}})
        assert merged == {"a": 1, "nested": {"x": 1, "y": 3}}
        assert base["nested"]["y"] == 2

    def test_precedence(self, tmp_path):
        _write_yaml(tmp_path / "extra_trees.yaml", {"defaults": {"ntree": 100, "nodesize": 2}})
        config_file = _write_yaml(tmp_path / "override.yaml", {"defaults": {"ntree": 50, "mtry": 3}})

        config = build_learner_config(
            "extra_trees",
            overrides={"mtry": 4},
            config_file=config_file,
            config_dir=tmp_path,
        )
        assert config == {"ntree": 50, "nodesize": 2, "mtry": 4}

    def test_missing_explicit_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            build_learner_config(
                "extra_trees",
                config_file=tmp_path / "missing.yaml",
                config_dir=tmp_path,
            )

    def test_invalid_values_raise(self, tmp_path):
        with pytest.raises(ConfigValidationError) as excinfo:
            build_learner_config(
                "extra_trees",
                overrides={"ntree": "many", "quantile": "yes"},
                config_dir=tmp_path,
            )
        assert len(excinfo.value.errors) == 2
        assert excinfo.value.learner_name == "extra_trees"


class TestValidation:
    """Tests for validate_learner_config."""

    def test_valid(self):
        assert validate_learner_config(
            {"ntree": 10, "mtry": 2, "even_cuts": False, "num_threads": -1,
             "prob_of_task_cuts": 0.5},
            "extra_trees",
        ) == []

    def test_none_values_skipped(self):
        assert validate_learner_config({"mtry": None, "nodesize": None}, "extra_trees") == []

    def test_bool_is_not_integer(self):
        errors = validate_learner_config({"ntree": True}, "extra_trees")
        assert errors == ["extra_trees.ntree must be an integer, got True"]

    def test_lower_bound(self):
        errors = validate_learner_config({"nodesize": 0}, "extra_trees")
        assert errors == ["extra_trees.nodesize must be >= 1, got 0"]

    def test_probability_range(self):
        errors = validate_learner_config({"prob_of_task_cuts": 1.5}, "extra_trees")
        assert len(errors) == 1
