"""Tests for environment settings."""

import pytest

from gh_depmap.config import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GH_DEPMAP_REPO", "GH_DEPMAP_WORKERS", "GH_DEPMAP_PRIOR_DAYS"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Test Settings defaults and validation."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.repository is None
        assert settings.workers == 1
        assert settings.prior_days is None
        settings.validate()

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_DEPMAP_REPO", "octo/app")
        monkeypatch.setenv("GH_DEPMAP_WORKERS", "4")
        monkeypatch.setenv("GH_DEPMAP_PRIOR_DAYS", "7")

        settings = Settings()

        assert settings.repository == "octo/app"
        assert settings.workers == 4
        assert settings.prior_days == 7

    def test_blank_values_are_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_DEPMAP_REPO", "")
        monkeypatch.setenv("GH_DEPMAP_PRIOR_DAYS", "  ")

        settings = Settings()

        assert settings.repository is None
        assert settings.prior_days is None

    def test_non_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_DEPMAP_WORKERS", "many")
        with pytest.raises(ValueError, match="GH_DEPMAP_WORKERS must be an integer"):
            Settings()

    def test_out_of_range(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_DEPMAP_WORKERS", "0")
        with pytest.raises(ValueError, match="at least 1"):
            Settings().validate()
