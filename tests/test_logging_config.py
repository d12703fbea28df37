"""
Tests for logging configuration.
"""
import logging


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from coffee_club.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("coffee_club")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        from coffee_club.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("coffee_club")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        from coffee_club.logging_config import setup_logging
        setup_logging(level="error")

        logger = logging.getLogger("coffee_club")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        from coffee_club.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("coffee_club")
        assert logger.level == logging.INFO

    def test_third_party_loggers_quieted(self):
        from coffee_club.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_debug_opens_library_loggers(self):
        from coffee_club.logging_config import QUIET_LOGGERS, setup_logging
        setup_logging(level="DEBUG")

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG

        setup_logging(level="INFO")


class TestNoSensitiveDataInLogs:
    """Admin credentials never reach the logs."""

    def test_admin_password_not_logged(self, client, caplog, monkeypatch):
        import coffee_club.config as config_mod
        secret = config_mod.ADMIN_PASSWORD

        with caplog.at_level(logging.DEBUG):
            client.get("/admin/unit-types", auth=(config_mod.ADMIN_USERNAME, secret))

        for record in caplog.records:
            assert secret not in record.getMessage()
