"""Tests für Config-Schema, Defaults und ConfigManager."""

import pytest
from pydantic import ValidationError

from config.defaults import default_planner_config
from config.manager import ConfigManager
from config.schema import PhaseConfig, PlannerConfig


class TestDefaults:
    def test_phase_defaults(self):
        ph = default_planner_config().phases
        assert ph.opening_minutes == 60
        assert ph.max_work_minutes == 360
        assert ph.meal_minutes == 60
        assert ph.closing_minutes == 180
        assert ph.min_meal_rooms == 2
        assert ph.lab_room_type == "Computer Lab"
        assert ph.lab_capacity_ratio == 10
        assert ph.fixed_minutes == 240

    def test_defaults_match_schema(self):
        assert default_planner_config() == PlannerConfig()

    def test_data_defaults(self):
        data = default_planner_config().data
        assert data.rooms_file == "rooms_list.csv"
        assert data.reservations_file == "reserved_rooms.csv"


class TestSchemaValidation:
    def test_non_positive_minutes(self):
        with pytest.raises(ValidationError):
            PhaseConfig(opening_minutes=0)

    def test_fixed_phases_exceed_day(self):
        with pytest.raises(ValidationError):
            PlannerConfig(phases=PhaseConfig(opening_minutes=600, closing_minutes=900))


class TestConfigManager:
    def test_first_run(self, tmp_path):
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        assert mgr.first_run_check()
        assert mgr.load_or_default() == default_planner_config()

    def test_save_and_load(self, tmp_path):
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        config = default_planner_config()
        mgr.save(config)
        assert not mgr.first_run_check()
        assert mgr.load() == config

    def test_saved_yaml_has_comments(self, tmp_path):
        path = tmp_path / "planner_config.yaml"
        ConfigManager(path).save(default_planner_config())
        text = path.read_text(encoding="utf-8")
        assert "─── Phasen ───" in text
        assert "─── Datenquellen ───" in text
        assert "closing_minutes: 180" in text

    def test_modified_values(self, tmp_path):
        mgr = ConfigManager(tmp_path / "planner_config.yaml")
        config = PlannerConfig(event_name="Code Night",
                               phases=PhaseConfig(meal_minutes=45))
        mgr.save(config)
        loaded = mgr.load()
        assert loaded.event_name == "Code Night"
        assert loaded.phases.meal_minutes == 45

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "fehlt.yaml").load()

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "planner_config.yaml"
        path.write_text("phases:\n  opening_minutes: -5\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager(path).load()
