"""
Tests for settings loading.
"""
import json

import pytest

from recipe_planner.data import SettingsManager


def _settings(**overrides):
    settings = {
        "planner": {"population_size": 20, "seed": 5},
        "params": {
            "servings": 2,
            "target": {"calories": 600, "protein": 30},
            "min": {"calories": 400},
            "max": {"calories": 800, "protein": 60},
            "target_budget": 500,
            "max_budget": 800,
        },
    }
    settings.update(overrides)
    return settings


def _write(tmp_path, content):
    path = tmp_path / "settings.json"
    if isinstance(content, str):
        path.write_text(content)
    else:
        path.write_text(json.dumps(content))
    return SettingsManager(path)


def test_load_valid(tmp_path):
    """Test a valid file loads config and params."""
    manager = _write(tmp_path, _settings())
    assert manager.load()
    assert manager.is_valid
    assert manager.validation_errors == []
    assert manager.get_error_message() == ""

    assert manager.planner_config.population_size == 20
    assert manager.planner_config.seed == 5
    assert manager.params.servings == 2
    assert manager.params.target.calories == 600.0
    assert manager.params.max_budget == 800.0


def test_planner_block_optional(tmp_path):
    """Test a missing planner block falls back to defaults."""
    settings = _settings()
    del settings["planner"]
    manager = _write(tmp_path, settings)
    assert manager.load()
    assert manager.planner_config.population_size == 100


def test_missing_file(tmp_path):
    """Test a missing file is reported, not raised."""
    manager = SettingsManager(tmp_path / "nope.json")
    assert not manager.load()
    assert "not found" in manager.get_error_message()


def test_invalid_json(tmp_path):
    """Test malformed JSON is reported."""
    manager = _write(tmp_path, "{not json")
    assert not manager.load()
    assert "Invalid JSON" in manager.validation_errors[0]


def test_missing_params(tmp_path):
    """Test a file without params is invalid."""
    settings = _settings()
    del settings["params"]
    manager = _write(tmp_path, settings)
    assert not manager.load()
    assert "Missing 'params' block" in manager.validation_errors


def test_collects_multiple_errors(tmp_path):
    """Test planner and params problems are all reported."""
    settings = _settings(planner={"population_size": 0})
    settings["params"]["min"] = {"calories": 900, "sodium": 1}
    manager = _write(tmp_path, settings)

    assert not manager.load()
    message = manager.get_error_message()
    assert "population_size" in message
    assert "unknown nutrients: sodium" in message
    assert "min calories" in message


def test_non_positive_servings(tmp_path):
    """Test zero servings is invalid."""
    settings = _settings()
    settings["params"]["servings"] = 0
    manager = _write(tmp_path, settings)
    assert not manager.load()
    assert "servings must be positive" in manager.get_error_message()


def test_non_integer_servings(tmp_path):
    """Test fractional servings are invalid."""
    settings = _settings()
    settings["params"]["servings"] = 1.5
    manager = _write(tmp_path, settings)
    assert not manager.load()


def test_properties_require_valid_settings(tmp_path):
    """Test accessing settings before a successful load raises."""
    manager = SettingsManager(tmp_path / "settings.json")
    with pytest.raises(ValueError):
        manager.planner_config
    with pytest.raises(ValueError):
        manager.params


def test_reload_clears_previous_errors(tmp_path):
    """Test a fixed file loads cleanly after a failed load."""
    manager = _write(tmp_path, "{broken")
    assert not manager.load()

    (tmp_path / "settings.json").write_text(json.dumps(_settings()))
    assert manager.load()
    assert manager.validation_errors == []
