"""Tests for settings and prometheus metrics."""

from prometheus_client import REGISTRY
import pytest

from boardcore.config import EngineSettings, get_settings, reset_settings
from boardcore.errors import InvalidMoveError


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestSettings:
    def test_defaults(self) -> None:
        settings = EngineSettings.from_env()
        assert settings.debug_engine is False
        assert settings.enforce_failsafe is False
        assert settings.log_level == "INFO"
        assert settings.metrics_enabled is True

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("BOARDCORE_DEBUG_ENGINE", "true")
        monkeypatch.setenv("BOARDCORE_LOG_LEVEL", "debug")
        monkeypatch.setenv("BOARDCORE_METRICS_ENABLED", "0")
        settings = EngineSettings.from_env()
        assert settings.debug_engine is True
        assert settings.log_level == "DEBUG"
        assert settings.metrics_enabled is False

    def test_settings_are_cached_until_reset(self, monkeypatch) -> None:
        first = get_settings()
        monkeypatch.setenv("BOARDCORE_ENFORCE_FAILSAFE", "yes")
        assert get_settings() is first
        reset_settings()
        assert get_settings().enforce_failsafe is True

    def test_debug_trace_goes_to_stderr(self, monkeypatch, make_engine, capsys) -> None:
        monkeypatch.setenv("BOARDCORE_DEBUG_ENGINE", "1")
        reset_settings()
        make_engine("reversi").move("c5", partial=True)
        assert "partial 'c5'" in capsys.readouterr().err


class TestMetrics:
    """Counters recorded by the execution engine."""

    def test_commit_counter(self, make_engine) -> None:
        labels = {"game": "konane", "mode": "untrusted"}
        before = _sample("boardcore_moves_committed_total", labels)
        make_engine("konane").move("a1")
        assert _sample("boardcore_moves_committed_total", labels) == before + 1

    def test_trusted_commits_labelled(self, make_engine) -> None:
        labels = {"game": "konane", "mode": "trusted"}
        before = _sample("boardcore_moves_committed_total", labels)
        make_engine("konane").move("a1", trusted=True)
        assert _sample("boardcore_moves_committed_total", labels) == before + 1

    def test_rejection_counter(self, make_engine) -> None:
        labels = {"game": "reversi", "code": "VALIDATION_GENERAL"}
        before = _sample("boardcore_move_rejections_total", labels)
        with pytest.raises(InvalidMoveError):
            make_engine("reversi").move("a1")
        assert _sample("boardcore_move_rejections_total", labels) == before + 1

    def test_finished_games_counter(self, make_engine) -> None:
        labels = {"game": "hex", "outcome": "draw"}
        before = _sample("boardcore_games_finished_total", labels)
        make_engine("hex").draw()
        assert _sample("boardcore_games_finished_total", labels) == before + 1

    def test_click_error_counter(self, make_engine) -> None:
        labels = {"game": "halma"}
        before = _sample("boardcore_click_errors_total", labels)
        make_engine("halma").handle_click("", 42, 42)
        assert _sample("boardcore_click_errors_total", labels) == before + 1

    def test_disabled_metrics(self, monkeypatch, make_engine) -> None:
        monkeypatch.setenv("BOARDCORE_METRICS_ENABLED", "0")
        reset_settings()
        labels = {"game": "konane", "mode": "untrusted"}
        before = _sample("boardcore_moves_committed_total", labels)
        make_engine("konane").move("a1")
        assert _sample("boardcore_moves_committed_total", labels) == before
