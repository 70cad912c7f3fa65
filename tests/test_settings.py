from __future__ import annotations

import pytest

from gocl import settings


def test_timeout_defaults_when_unset(monkeypatch) -> None:
    monkeypatch.delenv("GOCL_PROBE_TIMEOUT", raising=False)
    assert settings.probe_timeout() == settings.DEFAULT_PROBE_TIMEOUT


def test_timeout_accepts_fractions(monkeypatch) -> None:
    monkeypatch.setenv("GOCL_PROBE_TIMEOUT", " 2.5 ")
    assert settings.probe_timeout() == 2.5


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_timeout_is_rejected(monkeypatch, value) -> None:
    monkeypatch.setenv("GOCL_PROBE_TIMEOUT", value)
    with pytest.raises(ValueError, match="GOCL_PROBE_TIMEOUT"):
        settings.probe_timeout()
