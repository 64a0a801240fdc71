# ==============================================================================
# SETTINGS TESTS
# ==============================================================================
# Environment parsing for list-valued settings
# ==============================================================================

import pytest

from shoppy.core.settings import Settings


class TestCorsOrigins:

    def test_comma_separated_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        assert Settings().CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_json_list_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["http://a.test"]')

        assert Settings().CORS_ORIGINS == ["http://a.test"]

    def test_wildcard_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "*")

        assert Settings().CORS_ORIGINS == ["*"]

    @pytest.mark.parametrize(
        "value, expected",
        [
            (["http://a.test"], ["http://a.test"]),
            ("http://a.test,", ["http://a.test"]),
        ],
    )
    def test_constructor_values(self, monkeypatch, value, expected):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)

        assert Settings(CORS_ORIGINS=value).CORS_ORIGINS == expected
