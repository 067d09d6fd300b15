"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError


def _make(tmp_path, **overrides):
    from config.settings import Settings
    return Settings(
        history_db_path=tmp_path / "history.db",
        log_dir=tmp_path / "logs",
        _env_file=None,
        **overrides,
    )


class TestSettingsDefaults:
    def test_generation_defaults(self, settings):
        assert settings.default_character_count == 1500
        assert settings.default_language == "pt-BR"

    def test_budgets(self, settings):
        assert settings.max_retries == 3
        assert settings.max_refinement_attempts == 2

    def test_window_defaults(self, settings):
        assert settings.window_floor == 100
        assert settings.window_padding == 500

    def test_artifact_limits(self, settings):
        assert settings.description_max_chars == 250
        assert settings.thumbnail_context_chars == 500

    def test_parent_dirs_created(self, tmp_path):
        settings = _make(tmp_path / "nested")
        assert settings.history_db_path.parent.exists()


class TestSettingsValidation:
    def test_negative_retries_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="Retry budgets"):
            _make(tmp_path, max_retries=-1)

    def test_zero_retries_allowed(self, tmp_path):
        assert _make(tmp_path, max_refinement_attempts=0).max_refinement_attempts == 0

    def test_zero_character_count_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            _make(tmp_path, default_character_count=0)

    def test_negative_padding_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="non-negative"):
            _make(tmp_path, window_padding=-10)

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "claude-haiku-4-5")
        monkeypatch.setenv("MAX_RETRIES", "5")
        settings = _make(tmp_path)
        assert settings.llm_model == "claude-haiku-4-5"
        assert settings.max_retries == 5


class TestGetSettings:
    def test_cached_instance(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        import config.settings as settings_module
        monkeypatch.setattr(settings_module, "_settings_instance", None)
        first = settings_module.get_settings()
        assert settings_module.get_settings() is first


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_handlers(self):
        import logging
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        from config.logging_config import LLM_LOGGERS, _QUIET_LOGGERS
        for name in LLM_LOGGERS + _QUIET_LOGGERS:
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)

    def test_creates_log_files(self, tmp_path):
        import logging
        from config.logging_config import setup_logging
        setup_logging(level=logging.INFO, log_dir=tmp_path / "logs", console_enabled=False)
        logging.getLogger("tools.retry").warning("retrying")
        assert (tmp_path / "logs" / "versecraft.log").exists()
        assert "retrying" in (tmp_path / "logs" / "llm_calls.log").read_text(encoding="utf-8")

    def test_reinit_does_not_stack_handlers(self, tmp_path):
        import logging
        from config.logging_config import setup_logging
        setup_logging(log_dir=tmp_path / "logs")
        first_file = logging.getLogger().handlers[-1]
        setup_logging(log_dir=tmp_path / "logs")
        assert len(logging.getLogger().handlers) == 2
        assert first_file.stream is None
        assert len(logging.getLogger("tools.retry").handlers) == 1

    def test_llm_debug_kept_out_of_app_log(self, tmp_path):
        import logging
        from config.logging_config import setup_logging
        setup_logging(level=logging.INFO, log_dir=tmp_path / "logs", console_enabled=False)
        logging.getLogger("tools.agent_sdk_client").debug("prompt sent")
        assert "prompt sent" in (tmp_path / "logs" / "llm_calls.log").read_text(encoding="utf-8")
        assert "prompt sent" not in (tmp_path / "logs" / "versecraft.log").read_text(encoding="utf-8")

    def test_dependency_loggers_quiet_unless_debug(self, tmp_path):
        import logging
        from config.logging_config import setup_logging
        setup_logging(level=logging.INFO, log_dir=tmp_path / "logs", console_enabled=False)
        assert logging.getLogger("claude_agent_sdk").level == logging.WARNING
        setup_logging(level=logging.DEBUG, log_dir=tmp_path / "logs", console_enabled=False)
        assert logging.getLogger("claude_agent_sdk").level == logging.NOTSET
