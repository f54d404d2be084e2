import pytest
from pydantic import ValidationError

from mathpaste.config import NormalizerSettings


def test_defaults(default_settings):
    assert default_settings.expand_shorthand is True
    assert default_settings.synthesize_tables is True
    assert default_settings.column_tolerance == 1


def test_from_env(monkeypatch):
    monkeypatch.setenv("MATHPASTE_SYNTHESIZE_TABLES", "false")
    monkeypatch.setenv("MATHPASTE_COLUMN_TOLERANCE", "2")
    monkeypatch.setenv("MATHPASTE_EXPAND_SHORTHAND", "")

    settings = NormalizerSettings.from_env()
    assert settings.synthesize_tables is False
    assert settings.column_tolerance == 2
    assert settings.expand_shorthand is True


def test_from_env_rejects_bad_values(monkeypatch):
    monkeypatch.setenv("MATHPASTE_COLUMN_TOLERANCE", "lots")
    with pytest.raises(ValidationError):
        NormalizerSettings.from_env()


def test_negative_tolerance_is_invalid():
    with pytest.raises(ValidationError):
        NormalizerSettings(column_tolerance=-1)
