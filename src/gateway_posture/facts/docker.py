"""Container facts gathered through the docker CLI."""

import json
import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from gateway_posture.errors import FactUnavailable, RuntimeUnavailable

logger = logging.getLogger(__name__)

AUDIT_COMMAND = ["node", "dist/index.js", "security", "audit", "--deep", "--json"]


def _first_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[0] if lines else ""


def _parse_json(output: str, what: str) -> Any:
    try:
        return json.loads(output)
    except json.JSONDecodeError as exc:
        raise FactUnavailable(f"{what}: unparseable output") from exc


class DockerCompose:
    """Runs `docker compose` against the base file plus the secure overlay."""

    def __init__(self, compose_files: Sequence[Path], docker: str = "docker"):
        self.compose_files = [Path(p) for p in compose_files]
        self.docker = docker
        self._version: str | None = None
        self._unavailable: RuntimeUnavailable | None = None

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        cmd = [self.docker, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise RuntimeUnavailable(f"{self.docker} not found") from exc
        if result.returncode != 0:
            logger.debug(
                "%s exited %d: %s", args[0], result.returncode, _first_line(result.stderr)
            )
        return result

    def ensure_available(self) -> str:
        """Return the compose version, or raise RuntimeUnavailable.

        The probe runs once; its result is reused for every later fact.
        """
        if self._unavailable is not None:
            raise self._unavailable
        if self._version is not None:
            return self._version

        if shutil.which(self.docker) is None:
            self._unavailable = RuntimeUnavailable(f"{self.docker} not found")
            raise self._unavailable
        try:
            result = self._run(["compose", "version", "--short"])
        except RuntimeUnavailable as exc:
            self._unavailable = exc
            raise
        if result.returncode != 0:
            self._unavailable = RuntimeUnavailable("docker compose v2 not available")
            raise self._unavailable
        self._version = result.stdout.strip() or "unknown"
        return self._version

    def _compose(self, *args: str) -> subprocess.CompletedProcess:
        self.ensure_available()
        files: list[str] = []
        for path in self.compose_files:
            files.extend(["-f", str(path)])
        return self._run(["compose", *files, *args])

    def _compose_output(self, *args: str, what: str) -> str:
        result = self._compose(*args)
        if result.returncode != 0:
            detail = _first_line(result.stderr) or f"exit {result.returncode}"
            raise FactUnavailable(f"{what} failed: {detail}")
        return result.stdout.strip()

    def is_running(self, service: str) -> bool:
        output = self._compose_output(
            "ps", "--status", "running", "-q", service, what=f"listing {service}"
        )
        return bool(output)

    def container_id(self, service: str) -> str | None:
        output = self._compose_output("ps", "-q", service, what=f"listing {service}")
        return _first_line(output) or None

    def _inspect(self, service: str, template: str) -> str:
        cid = self.container_id(service)
        if cid is None:
            raise FactUnavailable(f"{service} container not found")
        result = self._run(["inspect", "--format", template, cid])
        if result.returncode != 0:
            raise FactUnavailable(f"docker inspect failed: {_first_line(result.stderr)}")
        return result.stdout.strip()

    def effective_uid(self, service: str) -> str:
        uid = self._compose_output("exec", "-T", service, "id", "-u", what="id -u")
        if not uid:
            raise FactUnavailable("id -u printed nothing")
        return uid

    def dropped_capabilities(self, service: str) -> list[str]:
        data = _parse_json(
            self._inspect(service, "{{json .HostConfig.CapDrop}}"), "CapDrop"
        )
        return [str(cap) for cap in data or []]

    def mounts(self, service: str) -> list[dict[str, Any]]:
        data = _parse_json(self._inspect(service, "{{json .Mounts}}"), "Mounts")
        return list(data or [])

    def readonly_rootfs(self, service: str) -> bool:
        value = self._inspect(service, "{{.HostConfig.ReadonlyRootfs}}")
        if value not in ("true", "false"):
            raise FactUnavailable(f"unexpected ReadonlyRootfs value {value!r}")
        return value == "true"

    def port_binding(self, service: str, port: int) -> str | None:
        result = self._compose("port", service, str(port))
        if result.returncode != 0:
            detail = _first_line(result.stderr)
            if "no port" in detail.lower():
                return None
            raise FactUnavailable(
                f"port lookup failed: {detail or f'exit {result.returncode}'}"
            )
        output = _first_line(result.stdout)
        # Some compose versions print ":0" for an unpublished port
        if not output or output.endswith(":0"):
            return None
        return output

    def can_reach(self, service: str, url: str) -> bool:
        result = self._compose("exec", "-T", service, "curl", "-fsS", url)
        return result.returncode == 0

    def security_audit(self, service: str) -> dict[str, Any]:
        # The audit exits non-zero when it has findings; only the JSON matters.
        result = self._compose("exec", "-T", service, *AUDIT_COMMAND)
        output = result.stdout.strip()
        if not output:
            raise FactUnavailable("security audit command failed")
        data = _parse_json(output, "security audit")
        if not isinstance(data, dict):
            raise FactUnavailable("security audit did not return a JSON object")
        return data
