from __future__ import annotations

import pytest

from gocl.errors import InputError
from gocl.inputs import iter_references, read_references


def test_reads_trimmed_non_blank_lines(tmp_path) -> None:
    urls = tmp_path / "urls.txt"
    urls.write_text("github.com/rix4uni/gocl\n\n   github.com/rix4uni/unew  \n")
    assert read_references(urls) == ["github.com/rix4uni/gocl", "github.com/rix4uni/unew"]


def test_hash_lines_are_references_too(tmp_path) -> None:
    urls = tmp_path / "urls.txt"
    urls.write_text("#github.com/a/b\ngithub.com/c/d\n")
    assert read_references(urls) == ["#github.com/a/b", "github.com/c/d"]


def test_existing_file_is_a_list(tmp_path) -> None:
    urls = tmp_path / "urls.txt"
    urls.write_text("github.com/a/b\ngithub.com/c/d\n")
    assert iter_references(str(urls)) == ["github.com/a/b", "github.com/c/d"]


def test_anything_else_is_a_single_reference(tmp_path) -> None:
    assert iter_references(" github.com/a/b@v1 ") == ["github.com/a/b@v1"]


def test_unreadable_file(tmp_path) -> None:
    with pytest.raises(InputError):
        read_references(tmp_path / "missing.txt")


def test_whitespace_only_value_has_no_references() -> None:
    assert iter_references("   ") == []
