"""Unit tests for CLI commands.

Tests CLI behavior using Click's CliRunner against a real state directory in
tmp_path, with docker either faked or absent.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gateway_posture import __version__
from gateway_posture.cli import main

from .conftest import GOOD_CONFIG, FakeRuntime


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    """Create a hardened ~/.openclaw layout."""
    state = tmp_path / ".openclaw"
    creds = state / "credentials"
    creds.mkdir(parents=True)
    config = state / "openclaw.json"
    config.write_text(json.dumps(GOOD_CONFIG))
    token = creds / "telegram-token"
    token.write_text("123:abc")
    os.chmod(state, 0o700)
    os.chmod(creds, 0o700)
    os.chmod(config, 0o600)
    os.chmod(token, 0o600)
    return state


@pytest.fixture
def no_docker():
    with patch("gateway_posture.facts.docker.shutil.which", return_value=None):
        yield


@pytest.fixture
def fake_docker():
    with patch("gateway_posture.verify.DockerCompose", return_value=FakeRuntime()):
        yield


def invoke(runner: CliRunner, state_dir: Path, *args: str):
    return runner.invoke(
        main,
        ["verify", "--state-dir", str(state_dir), "--project-dir", str(state_dir.parent), *args],
    )


class TestVersion:
    def test_version_flag_shows_version(self, runner: CliRunner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestVerify:
    def test_hardened_stack_exits_zero(self, runner, state_dir, fake_docker):
        result = invoke(runner, state_dir)

        assert result.exit_code == 0, result.output
        assert "[PASS] ~/.openclaw permissions: 700" in result.output
        assert "[PASS] gateway drops all capabilities: ALL" in result.output
        assert "Summary: PASS=22 FAIL=0 WARN=0" in result.output

    def test_docker_absent_exits_one(self, runner, state_dir, no_docker):
        """Given no docker binary, runtime checks fail and the report is complete."""
        result = invoke(runner, state_dir)

        assert result.exit_code == 1
        assert "[WARN] docker compose available: docker not found" in result.output
        assert "[FAIL] gateway container is running: docker not found" in result.output
        assert "[PASS] telegram allowFrom is non-empty with no wildcard" in result.output
        assert "Summary: PASS=12 FAIL=9 WARN=1" in result.output

    def test_loose_permissions_fail(self, runner, state_dir, fake_docker):
        os.chmod(state_dir / "openclaw.json", 0o644)

        result = invoke(runner, state_dir, "--verbose")

        assert result.exit_code == 1
        assert "[FAIL] openclaw.json permissions: got 644, expected 600" in result.output
        assert "chmod 600" in result.output

    def test_remediation_hidden_without_verbose(self, runner, state_dir, fake_docker):
        os.chmod(state_dir / "openclaw.json", 0o644)

        result = invoke(runner, state_dir)

        assert "chmod 600" not in result.output

    def test_warnings_do_not_fail(self, runner, state_dir):
        runtime = FakeRuntime(containers={"openclaw-gateway": "abc123"})
        with patch("gateway_posture.verify.DockerCompose", return_value=runtime):
            result = invoke(runner, state_dir)

        assert result.exit_code == 0
        assert "[WARN] ollama is not exposed to host" in result.output
        assert "[SKIP] ollama is reachable from gateway" in result.output
        assert "Summary: PASS=20 FAIL=0 WARN=1 SKIP=1" in result.output

    def test_category_filter(self, runner, state_dir, no_docker):
        result = invoke(runner, state_dir, "--category", "config")

        assert result.exit_code == 0
        assert "Summary: PASS=8 FAIL=0 WARN=0" in result.output
        assert "docker" not in result.output

    def test_invalid_category_is_usage_error(self, runner, state_dir):
        result = invoke(runner, state_dir, "--category", "network")

        assert result.exit_code == 2

    def test_json_output(self, runner, state_dir, no_docker):
        result = invoke(runner, state_dir, "--json")

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["summary"] == {
            "pass": 12,
            "fail": 9,
            "warn": 1,
            "skip": 0,
            "success": False,
        }
        assert data["settings"]["state_dir"] == str(state_dir)
        first = data["checks"][0]
        assert first == {
            "name": "~/.openclaw permissions",
            "category": "filesystem",
            "status": "pass",
            "message": "700",
            "remediation": None,
        }

    def test_debug_logs_go_to_stderr(self, runner, state_dir, no_docker):
        """Given --debug, log records reach stderr and stdout holds only the report."""
        result = invoke(runner, state_dir, "--debug", "--category", "config")

        assert result.exit_code == 0
        assert "Loaded config from" in result.stderr
        assert "Loaded config from" not in result.stdout
        assert "[PASS]" not in result.stderr
        stdout_lines = [line for line in result.stdout.splitlines() if line]
        assert len(stdout_lines) == 9
        assert all(line.startswith("[PASS] ") for line in stdout_lines[:8])
        assert stdout_lines[-1] == "Summary: PASS=8 FAIL=0 WARN=0"

    def test_without_debug_stderr_is_quiet(self, runner, state_dir, no_docker):
        result = invoke(runner, state_dir, "--category", "config")

        assert result.exit_code == 0
        assert result.stderr == ""

    def test_state_dir_from_environment(self, runner, state_dir, no_docker):
        result = runner.invoke(
            main,
            ["verify", "--category", "filesystem"],
            env={"OPENCLAW_STATE_DIR": str(state_dir)},
        )

        assert result.exit_code == 0
        assert "Summary: PASS=4 FAIL=0 WARN=0" in result.output

    def test_missing_state_dir(self, runner, tmp_path, no_docker):
        result = invoke(runner, tmp_path / "absent", "--category", "filesystem")

        assert result.exit_code == 1
        assert result.output.count("[FAIL]") == 4


class TestChecks:
    def test_lists_catalog(self, runner, tmp_path):
        result = runner.invoke(main, ["checks", "--state-dir", str(tmp_path)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 22
        assert lines[0].split(None, 1) == ["filesystem", "~/.openclaw permissions"]
        assert lines[-1].split(None, 1) == [
            "runtime",
            "security audit reports no critical findings",
        ]
