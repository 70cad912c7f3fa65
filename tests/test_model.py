from __future__ import annotations

from pathlib import Path

import pytest

from gocl.errors import CustomPathNotFound, ToolFailure
from gocl.model import OutputSpec


def test_custom_name_overrides_short_name() -> None:
    out = OutputSpec(directory="./bin", name="mytool")
    assert out.artifact_path("/home/me/src", "tool") == Path("/home/me/src/bin/mytool")


def test_short_name_is_the_default_artifact_name() -> None:
    out = OutputSpec(directory="bin")
    assert out.artifact_path("/home/me/src", "tool") == Path("/home/me/src/bin/tool")


def test_absolute_output_directory_is_kept() -> None:
    out = OutputSpec(directory="/opt/bin")
    assert out.artifact_path("/home/me/src", "tool") == Path("/opt/bin/tool")


def test_install_spec_has_no_artifact_path() -> None:
    out = OutputSpec()
    assert out.installs
    with pytest.raises(ValueError):
        out.artifact_path("/home/me/src", "tool")


def test_pipeline_error_renders_one_line() -> None:
    err = CustomPathNotFound("https://github.com/example/tool", "custom path 'x' does not exist", {"custom_path": "x"})
    assert str(err) == "resolve: custom path 'x' does not exist (https://github.com/example/tool)"
    assert err.kind == "path_resolution"
    assert err.detail_lines() == ["custom_path=x"]


def test_tool_failure_message() -> None:
    err = ToolFailure(command=["go", "install"], exit_code=2)
    assert str(err) == "`go install` exited with status 2"
