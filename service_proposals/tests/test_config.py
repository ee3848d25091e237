"""
Unit tests for gateway configuration.
"""

from shared.config import DEFAULT_ENGINE_URL, get_config, get_settings


class TestConfig:
    """Test cases for settings resolution."""

    def test_defaults(self, monkeypatch):
        """Defaults match the local engine and a three second probe."""
        for name in ("ENGINE_URL", "GATEWAY_ENGINE_URL", "GATEWAY_HEALTH_PROBE_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.engine_url == DEFAULT_ENGINE_URL
        assert settings.health_probe_timeout == 3.0
        assert settings.engine_request_timeout is None
        assert settings.shutdown_grace_seconds == 1.0

    def test_prefixed_environment(self, monkeypatch):
        """GATEWAY_ variables override settings."""
        monkeypatch.setenv("GATEWAY_ENGINE_URL", "http://engine:8080")
        monkeypatch.setenv("GATEWAY_HEALTH_PROBE_TIMEOUT", "1.5")
        monkeypatch.setenv("GATEWAY_ENGINE_REQUEST_TIMEOUT", "10")

        settings = get_settings()

        assert settings.engine_url == "http://engine:8080"
        assert settings.health_probe_timeout == 1.5
        assert settings.engine_request_timeout == 10.0

    def test_plain_engine_url_override(self, monkeypatch):
        """The unprefixed ENGINE_URL is honoured too."""
        monkeypatch.delenv("GATEWAY_ENGINE_URL", raising=False)
        monkeypatch.setenv("ENGINE_URL", "http://docker-engine:8080")

        assert get_settings().engine_url == "http://docker-engine:8080"

    def test_explicit_overrides(self):
        """Keyword overrides win over the environment."""
        settings = get_settings(engine_url="http://explicit", shutdown_grace_seconds=0)

        assert settings.engine_url == "http://explicit"
        assert settings.shutdown_grace_seconds == 0

    def test_service_config(self):
        """Service config carries name and port."""
        config = get_config("proposal_gateway", 8000)

        assert config.service_name == "proposal_gateway"
        assert config.port == 8000
        assert config.host == "0.0.0.0"
