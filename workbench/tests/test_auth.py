"""
Tests for credential acquisition
"""
from workbench.config import get_settings
from workbench.utils.auth import (
    Credential,
    EnvTokenProvider,
    MissingCredential,
    StaticTokenProvider,
    require_auth,
)


class TestRequireAuth:

    def test_token_available(self):
        result = require_auth(StaticTokenProvider("abc"))

        assert result == Credential(token="abc")
        assert result.authorization == "Bearer abc"

    def test_missing_token(self):
        assert isinstance(require_auth(StaticTokenProvider(None)), MissingCredential)
        assert isinstance(require_auth(StaticTokenProvider("")), MissingCredential)

    def test_plain_callable(self):
        assert require_auth(lambda: " xyz ") == Credential(token="xyz")


class TestProviders:

    def test_static_provider_set_and_clear(self):
        provider = StaticTokenProvider()
        provider.set_token("t1")
        assert provider() == "t1"

        provider.clear()
        assert provider() is None

    def test_env_provider(self, monkeypatch):
        monkeypatch.setenv("ACCESS_TOKEN", "from-env")
        get_settings.cache_clear()
        try:
            assert EnvTokenProvider()() == "from-env"
        finally:
            get_settings.cache_clear()

    def test_env_provider_empty(self, monkeypatch):
        monkeypatch.setenv("ACCESS_TOKEN", "")
        get_settings.cache_clear()
        try:
            assert EnvTokenProvider()() is None
        finally:
            get_settings.cache_clear()
