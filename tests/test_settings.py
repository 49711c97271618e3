"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tt_core.config.paths import DB_FILENAME, default_db_path
from tt_core.config.settings import TTSettings, get_settings
from tt_core.constants import DEFAULT_PLAN_LIMIT, WORKDAY_MINUTES


class TestTTSettings:
    def test_defaults(self) -> None:
        settings = TTSettings()

        assert settings.db_path == default_db_path()
        assert settings.db_path.name == DB_FILENAME
        assert settings.plan_limit == DEFAULT_PLAN_LIMIT
        assert settings.workday_minutes == WORKDAY_MINUTES
        assert settings.log_level == "WARNING"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("TT_DB_PATH", str(tmp_path / "work.db"))
        monkeypatch.setenv("TT_PLAN_LIMIT", "7")
        monkeypatch.setenv("TT_WORKDAY_MINUTES", "360")
        monkeypatch.setenv("TT_LOG_LEVEL", "debug")

        settings = TTSettings()

        assert settings.db_path == tmp_path / "work.db"
        assert settings.plan_limit == 7
        assert settings.workday_minutes == 360
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TT_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            TTSettings()

    def test_plan_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            TTSettings(plan_limit=0)

    def test_get_settings_reads_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("TT_DB_PATH", str(tmp_path / "env.db"))

        assert get_settings().db_path == tmp_path / "env.db"
