"""Tests for Cargo workspace root resolution.

cargo itself is never run; subprocess.run is patched to return canned
metadata output.
"""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from lsp_rust.lsp.workspace_root import WorkspaceRootResolver
from lsp_rust.types.errors import ErrorCode, RootResolutionError


def _completed(stdout: str = "", returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestResolveRoot:
    """Tests for WorkspaceRootResolver.resolve_root()."""

    def test_returns_workspace_root(self, tmp_path):
        metadata = {"packages": [], "workspace_root": "/home/user/project"}
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed(json.dumps(metadata))) as run:
            root = WorkspaceRootResolver().resolve_root(tmp_path)

        assert root == Path("/home/user/project")
        args, kwargs = run.call_args
        assert args[0] == ["cargo", "metadata", "--no-deps", "--format-version", "1"]
        assert kwargs["cwd"] == str(tmp_path)

    def test_custom_command(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed('{"workspace_root": "/w"}')) as run:
            WorkspaceRootResolver(["my-cargo", "metadata"]).resolve_root(tmp_path)
        assert run.call_args[0][0] == ["my-cargo", "metadata"]

    def test_nonzero_exit(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed(returncode=101, stderr="could not find `Cargo.toml`")):
            with pytest.raises(RootResolutionError, match="Cargo.toml") as exc_info:
                WorkspaceRootResolver().resolve_root(tmp_path)
        assert exc_info.value.code == ErrorCode.METADATA_COMMAND_FAILED

    def test_missing_executable(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   side_effect=FileNotFoundError("cargo")):
            with pytest.raises(RootResolutionError) as exc_info:
                WorkspaceRootResolver().resolve_root(tmp_path)
        assert isinstance(exc_info.value.original_error, FileNotFoundError)

    def test_malformed_json(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed("warning: something\n{")):
            with pytest.raises(RootResolutionError) as exc_info:
                WorkspaceRootResolver().resolve_root(tmp_path)
        assert exc_info.value.code == ErrorCode.METADATA_UNPARSABLE

    def test_non_object_json(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed("[1, 2]")):
            with pytest.raises(RootResolutionError) as exc_info:
                WorkspaceRootResolver().resolve_root(tmp_path)
        assert exc_info.value.code == ErrorCode.WORKSPACE_ROOT_MISSING

    def test_missing_field(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed('{"packages": []}')):
            with pytest.raises(RootResolutionError, match="workspace_root"):
                WorkspaceRootResolver().resolve_root(tmp_path)

    def test_error_carries_directory(self, tmp_path):
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed(returncode=1)):
            with pytest.raises(RootResolutionError) as exc_info:
                WorkspaceRootResolver().resolve_root(tmp_path)
        assert exc_info.value.context.file_path == str(tmp_path)
        assert exc_info.value.recovery_actions

    def test_recovery_command_quotes_directory(self, tmp_path):
        directory = tmp_path / "my crate; rm -rf"
        directory.mkdir()
        with patch("lsp_rust.lsp.workspace_root.subprocess.run",
                   return_value=_completed(returncode=1)):
            with pytest.raises(RootResolutionError) as exc_info:
                WorkspaceRootResolver().resolve_root(directory)
        command = exc_info.value.recovery_actions[0].command
        assert command == f"cd '{directory}' && cargo metadata --no-deps --format-version 1"
