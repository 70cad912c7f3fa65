from __future__ import annotations

import pytest

from gocl.reference import normalize


def test_bare_reference_gets_https_scheme() -> None:
    ref = normalize("github.com/example/tool")
    assert ref.url == "https://github.com/example/tool"
    assert ref.short_name == "tool"
    assert ref.raw == "github.com/example/tool"


def test_version_suffix_is_stripped() -> None:
    ref = normalize("github.com/example/tool@v1.2.0")
    assert ref.url == "https://github.com/example/tool"
    assert ref.short_name == "tool"


def test_everything_after_first_at_is_dropped() -> None:
    ref = normalize("github.com/example/tool@v1@extra/path")
    assert ref.url == "https://github.com/example/tool"
    assert "@" not in ref.url


def test_existing_scheme_is_not_duplicated() -> None:
    ref = normalize("https://github.com/example/tool")
    assert ref.url == "https://github.com/example/tool"
    assert not ref.url.startswith("https://https://")


def test_http_is_upgraded() -> None:
    assert normalize("http://github.com/example/tool").url == "https://github.com/example/tool"


def test_whitespace_and_trailing_slash() -> None:
    ref = normalize("  github.com/example/tool/  ")
    assert ref.url == "https://github.com/example/tool"
    assert ref.short_name == "tool"


def test_module_path_drops_scheme() -> None:
    assert normalize("github.com/example/tool@latest").module_path == "github.com/example/tool"


@pytest.mark.parametrize(
    "raw",
    [
        "github.com/example/tool",
        "github.com/example/tool@v1.2.0",
        "https://gitlab.com/group/sub/project",
        "http://example.org/x",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)
    twice = normalize(once.url)
    assert twice.url == once.url
    assert twice.short_name == once.short_name


@pytest.mark.parametrize("raw", ["@v1", "https://", "http://"])
def test_reference_without_a_path_has_no_short_name(raw: str) -> None:
    assert normalize(raw).short_name == ""
