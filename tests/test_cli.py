"""Tests for the lsp-rust CLI."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from lsp_rust.cli.main import cli
from lsp_rust.types.errors import RootResolutionError


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("RLS_ROOT", "LSP_RUST_RLS_COMMAND", "LSP_RUST_RA_COMMAND"):
        monkeypatch.delenv(name, raising=False)
    # keep loguru sinks pointed at the real stderr, not the runner's capture
    monkeypatch.setattr("lsp_rust.cli.main.configure_logging", lambda level=None: 0)


class TestCLIGroup:
    """Tests for the main group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "lsp-rust v" in result.output

    def test_no_command_shows_help(self, runner):
        result = runner.invoke(cli)
        assert result.exit_code == 0
        assert "Usage:" in result.output


class TestCommandCommand:
    """Tests for `lsp-rust command`."""

    def test_rls_from_env_root(self, runner, monkeypatch):
        monkeypatch.setenv("RLS_ROOT", "/src/rls")
        result = runner.invoke(cli, ["command"])
        assert result.exit_code == 0
        assert "--manifest-path=/src/rls/Cargo.toml" in result.output

    def test_rls_unresolvable(self, runner):
        result = runner.invoke(cli, ["command", "--backend", "rls"])
        assert result.exit_code == 1
        assert "RLS_ROOT" in result.output

    def test_explicit_server_command(self, runner):
        result = runner.invoke(cli, ["command", "--backend", "rust-analyzer",
                                     "--server-command", "rust-analyzer --verbose"])
        assert result.exit_code == 0
        assert result.output.strip() == "rust-analyzer --verbose"

    def test_rust_analyzer_default(self, runner):
        result = runner.invoke(cli, ["command", "--backend", "rust-analyzer"])
        assert result.output.strip() == "ra_lsp_server"


class TestRootCommand:
    """Tests for `lsp-rust root`."""

    def test_prints_root(self, runner, tmp_path):
        with patch("lsp_rust.cli.main.WorkspaceRootResolver") as resolver_cls:
            resolver_cls.return_value.resolve_root.return_value = Path("/w/root")
            result = runner.invoke(cli, ["root", str(tmp_path)])
        assert result.exit_code == 0
        assert result.output.strip() == "/w/root"

    def test_failure(self, runner, tmp_path):
        with patch("lsp_rust.cli.main.WorkspaceRootResolver") as resolver_cls:
            resolver_cls.return_value.resolve_root.side_effect = RootResolutionError("no Cargo.toml")
            result = runner.invoke(cli, ["root", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cargo workspace root" in result.output


class TestConfigCommand:
    """Tests for `lsp-rust config`."""

    def test_payload(self, runner):
        result = runner.invoke(cli, ["config", "--set", "build_lib=true",
                                     "--set", "build_bin=server", "--set", "wait_to_build=500"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"settings": {"rust": {
            "build_lib": True,
            "build_bin": "server",
            "wait_to_build": 500,
        }}}

    def test_bad_option(self, runner):
        result = runner.invoke(cli, ["config", "--set", "novalue"])
        assert result.exit_code == 2
