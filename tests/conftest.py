"""Shared fixtures and fake fact providers."""

import copy
from pathlib import Path
from typing import Any

import pytest

from gateway_posture.errors import RuntimeUnavailable
from gateway_posture.facts.config import lookup
from gateway_posture.settings import Settings

GOOD_CONFIG: dict[str, Any] = {
    "gateway": {
        "mode": "local",
        "bind": "lan",
        "auth": {"mode": "token", "token": "a" * 32},
    },
    "channels": {
        "telegram": {
            "enabled": True,
            "tokenFile": "~/.openclaw/credentials/telegram-token",
            "dmPolicy": "allowlist",
            "allowFrom": ["123"],
            "groupPolicy": "disabled",
        }
    },
    "tools": {
        "exec": {"applyPatch": {"workspaceOnly": True}},
        "fs": {"workspaceOnly": True},
    },
    "logging": {"redactSensitive": "tools"},
}


class DictConfig:
    """Config facts over an already parsed document."""

    def __init__(self, document: dict[str, Any]):
        self.document = document

    def get(self, path: str) -> Any:
        return lookup(self.document, path)


class FakeFilesystem:
    def __init__(self, bits: dict[Path, str]):
        self.bits = bits

    def permission_bits(self, path: Path) -> str | None:
        return self.bits.get(path)


class FakeRuntime:
    """In-memory stand-in for a healthy hardened compose stack."""

    def __init__(self, **overrides: Any):
        self.available = True
        self.running = {"openclaw-gateway": True}
        self.containers = {"openclaw-gateway": "abc123", "ollama": "def456"}
        self.uid = "1000"
        self.caps = ["ALL"]
        self.mount_list = [
            {
                "Type": "bind",
                "Source": "/home/user/.openclaw",
                "Destination": "/home/node/.openclaw",
            }
        ]
        self.readonly = True
        self.ports = {("openclaw-gateway", 18789): "127.0.0.1:18789"}
        self.reachable = True
        self.audit = {"summary": {"critical": 0, "warn": 2, "info": 5}}
        for key, value in overrides.items():
            setattr(self, key, value)

    def _require(self) -> None:
        if not self.available:
            raise RuntimeUnavailable("docker not found")

    def ensure_available(self) -> str:
        self._require()
        return "2.29.1"

    def is_running(self, service: str) -> bool:
        self._require()
        return self.running.get(service, False)

    def container_id(self, service: str) -> str | None:
        self._require()
        return self.containers.get(service)

    def effective_uid(self, service: str) -> str:
        self._require()
        return self.uid

    def dropped_capabilities(self, service: str) -> list[str]:
        self._require()
        return list(self.caps)

    def mounts(self, service: str) -> list[dict[str, Any]]:
        self._require()
        return list(self.mount_list)

    def readonly_rootfs(self, service: str) -> bool:
        self._require()
        return self.readonly

    def port_binding(self, service: str, port: int) -> str | None:
        self._require()
        return self.ports.get((service, port))

    def can_reach(self, service: str, url: str) -> bool:
        self._require()
        return self.reachable

    def security_audit(self, service: str) -> dict[str, Any]:
        self._require()
        return self.audit


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(state_dir=tmp_path / ".openclaw", project_dir=tmp_path)


@pytest.fixture
def good_bits(settings: Settings) -> dict[Path, str]:
    return {
        settings.state_dir: "700",
        settings.config_path: "600",
        settings.credentials_dir: "700",
        settings.telegram_token_path: "600",
    }


@pytest.fixture
def good_config() -> dict[str, Any]:
    return copy.deepcopy(GOOD_CONFIG)


@pytest.fixture
def providers(good_bits, good_config) -> dict[str, Any]:
    """Fake providers describing a fully hardened deployment."""
    return {
        "fs": FakeFilesystem(good_bits),
        "config": DictConfig(good_config),
        "runtime": FakeRuntime(),
    }
