"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest
import structlog

from arcane_engine.core.config import Settings
from arcane_engine.core.logging import (
    add_engine_context,
    combat_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from arcane_engine.engine.combat import CombatEngine
from arcane_engine.models.character import Character, MonsterStatBlock
from arcane_engine.models.enums import DamageType


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog and root logger defaults after each test."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)


def _json_lines(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def _event(output: str, name: str) -> dict[str, object]:
    return next(record for record in _json_lines(output) if record["event"] == name)


class TestEngineContext:
    """Tests for the engine context processor."""

    def test_stamps_app_and_version(self) -> None:
        """Test the engine name and version are added to events."""
        processor = add_engine_context("arcane_engine", "0.1.0")

        event = processor(None, "info", {"event": "Dice rolled"})

        assert event["app"] == "arcane_engine"
        assert event["version"] == "0.1.0"

    def test_version_omitted_when_unknown(self) -> None:
        """Test no version key is added without a version."""
        event = add_engine_context("arcane_engine")(None, "info", {"event": "Dice rolled"})

        assert "version" not in event


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON logs carry the event, level, logger and key/value pairs."""
        configure_logging(level="INFO", json_format=True)

        get_logger("arcane_engine.tests").info("Combat started", combatants=2)

        record = _event(capsys.readouterr().out, "Combat started")
        assert record["level"] == "info"
        assert record["logger"] == "arcane_engine.tests"
        assert record["combatants"] == 2
        assert record["app"] == "arcane_engine"

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)

        get_logger("arcane_engine.tests").info("Dice rolled")

        assert "Dice rolled" not in capsys.readouterr().out

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the readable renderer includes the event and its values."""
        configure_logging(level="INFO")

        get_logger("arcane_engine.tests").info("Round ended", round=3)

        output = capsys.readouterr().out
        assert "Round ended" in output
        assert "round=3" in output

    def test_log_file_receives_json(self, tmp_path: Path) -> None:
        """Test engine and standard library events reach the log file as JSON."""
        log_file = tmp_path / "engine.log"
        configure_logging(level="INFO", log_file=str(log_file))

        get_logger("arcane_engine.tests").info("Next turn", combatant="Thorin")
        logging.getLogger("arcane_engine.tests").warning("Fallback engaged")

        records = _json_lines(log_file.read_text(encoding="utf-8"))
        assert [r["event"] for r in records] == ["Next turn", "Fallback engaged"]
        assert records[0]["combatant"] == "Thorin"
        assert records[1]["level"] == "warning"

    def test_configured_from_settings(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test level, format, log file and version come from the settings."""
        log_file = tmp_path / "engine.log"
        settings = Settings(log_level="DEBUG", json_logs=True, log_file=str(log_file))
        configure_logging_from_settings(settings)

        get_logger("arcane_engine.tests").debug("Damage rolled", total=7)

        record = _event(capsys.readouterr().out, "Damage rolled")
        assert record["total"] == 7
        assert record["version"] == settings.app_version
        assert _event(log_file.read_text(encoding="utf-8"), "Damage rolled")["total"] == 7


class TestCombatContext:
    """Tests for encounter-scoped log context."""

    def test_binds_inside_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events inside the block carry the encounter id."""
        configure_logging(json_format=True)

        with combat_context("abc123", round=2):
            get_logger("arcane_engine.tests").info("Next turn")
        get_logger("arcane_engine.tests").info("Outside")

        output = capsys.readouterr().out
        inside = _event(output, "Next turn")
        assert inside["combat_id"] == "abc123"
        assert inside["round"] == 2
        assert "combat_id" not in _event(output, "Outside")

    def test_nested_blocks_restore_outer(self) -> None:
        """Test leaving an inner block restores the outer encounter context."""
        with combat_context("outer", round=1):
            with combat_context("inner", round=4):
                assert structlog.contextvars.get_contextvars()["combat_id"] == "inner"
            assert structlog.contextvars.get_contextvars() == {
                "combat_id": "outer",
                "round": 1,
            }

        assert structlog.contextvars.get_contextvars() == {}

    def test_engine_operations_tag_events(
        self,
        scripted_engine: Callable[..., CombatEngine],
        sample_character: Character,
        sample_goblin: MonsterStatBlock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test combat operations log with their encounter id and round."""
        configure_logging(json_format=True)
        engine = scripted_engine(15, 5)

        combat = engine.start_combat([sample_character], [sample_goblin])
        engine.apply_damage(combat, "goblin_1", 3, DamageType.SLASHING, "Longsword")

        output = capsys.readouterr().out
        started = _event(output, "Combat started")
        damage = _event(output, "Damage applied")
        assert started["combat_id"] == combat.id
        assert damage["combat_id"] == combat.id
        assert damage["round"] == 1
        assert structlog.contextvars.get_contextvars() == {}
