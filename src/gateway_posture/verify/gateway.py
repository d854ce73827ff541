"""Verification checks for a hardened gateway deployment."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from gateway_posture.errors import RuntimeUnavailable
from gateway_posture.facts import ConfigFacts, ContainerFacts, FilesystemFacts
from gateway_posture.settings import Settings

from .runner import PostureChecker
from .types import CheckCategory, Outcome, failed, passed, skipped, warned

CONFIG_FIX = "re-run secure setup or edit openclaw.json"
SETUP_FIX = "re-run secure setup"


def is_wildcard(entry: Any) -> bool:
    """True for `*`, also when written with escaping backslashes or padding."""
    if not isinstance(entry, str):
        return False
    return entry.strip().replace("\\", "") == "*"


# Filesystem


def permission_check(
    fs: FilesystemFacts, path: Path, want: str
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        got = fs.permission_bits(path)
        if got is None:
            return failed(f"missing: {path}", remediation=SETUP_FIX)
        if got == want:
            return passed(want)
        return failed(f"got {got}, expected {want}", remediation=f"chmod {want} {path}")

    return evaluate


# Configuration


def equals_check(config: ConfigFacts, path: str, want: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        value = config.get(path)
        if value is None or value == "":
            return failed(f"{path} is unset", remediation=CONFIG_FIX)
        if not isinstance(value, str):
            return failed(f"{path} is {value!r}, not a string", remediation=CONFIG_FIX)
        if value != want:
            return failed(f"got {value!r}, expected {want!r}", remediation=CONFIG_FIX)
        return passed(str(value))

    return evaluate


def is_true_check(config: ConfigFacts, path: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        value = config.get(path)
        if value is None:
            return failed(f"{path} is unset", remediation=CONFIG_FIX)
        if value is not True:
            return failed(f"got {value!r}, expected true", remediation=CONFIG_FIX)
        return passed("true")

    return evaluate


def not_in_check(
    config: ConfigFacts, path: str, rejected: set[str]
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        value = config.get(path)
        if value is None or value == "":
            return failed(f"{path} is unset", remediation=CONFIG_FIX)
        if not isinstance(value, str):
            return failed(f"{path} is {value!r}, not a string", remediation=CONFIG_FIX)
        if value in rejected:
            return failed(f"{path} is {value!r}", remediation=CONFIG_FIX)
        return passed(str(value))

    return evaluate


def token_length_check(
    config: ConfigFacts, path: str, minimum: int
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        token = config.get(path)
        if not isinstance(token, str) or not token:
            return failed(f"{path} is unset", remediation=CONFIG_FIX)
        if len(token) < minimum:
            return failed(f"length {len(token)} < {minimum}", remediation=CONFIG_FIX)
        return passed(f"length {len(token)}")

    return evaluate


def allow_list_check(config: ConfigFacts, path: str) -> Callable[[], Outcome]:
    """Both conditions must hold: at least one entry, and no wildcard."""

    def evaluate() -> Outcome:
        entries = config.get(path)
        if entries is None:
            return failed(f"{path} is unset", remediation=CONFIG_FIX)
        if not isinstance(entries, list):
            return failed(f"{path} is not a list", remediation=CONFIG_FIX)
        if not entries:
            return failed(f"{path} is empty", remediation=CONFIG_FIX)
        if any(is_wildcard(e) for e in entries):
            return failed(f"{path} contains a wildcard", remediation=CONFIG_FIX)
        return passed(f"{len(entries)} entries")

    return evaluate


# Runtime


def runtime_available_check(runtime: ContainerFacts) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        try:
            version = runtime.ensure_available()
        except RuntimeUnavailable as exc:
            return warned(f"{exc}; runtime checks will fail")
        return passed(version)

    return evaluate


def running_check(runtime: ContainerFacts, service: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        if runtime.is_running(service):
            return passed("running")
        return failed("not running", remediation=f"docker compose up -d {service}")

    return evaluate


def uid_check(
    runtime: ContainerFacts, service: str, want: str
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        uid = runtime.effective_uid(service)
        if uid == want:
            return passed(uid)
        return failed(f"uid is {uid!r}, expected {want}")

    return evaluate


def cap_drop_check(runtime: ContainerFacts, service: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        caps = runtime.dropped_capabilities(service)
        if "ALL" in caps:
            return passed("ALL")
        return failed(
            f"cap_drop is {caps or 'empty'}", remediation="set cap_drop: [ALL]"
        )

    return evaluate


def _mentions_docker_sock(mount: dict[str, Any]) -> bool:
    return any(
        isinstance(value, str) and "docker.sock" in value for value in mount.values()
    )


def docker_sock_check(runtime: ContainerFacts, service: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        mounts = runtime.mounts(service)
        if any(_mentions_docker_sock(m) for m in mounts if isinstance(m, dict)):
            return failed("docker.sock is mounted", remediation="remove the docker.sock volume")
        return passed(f"{len(mounts)} mounts")

    return evaluate


def readonly_check(runtime: ContainerFacts, service: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        if runtime.readonly_rootfs(service):
            return passed("read-only")
        return failed("writable", remediation="set read_only: true")

    return evaluate


def loopback_port_check(
    runtime: ContainerFacts, service: str, port: int
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        binding = runtime.port_binding(service, port)
        if binding is None:
            return failed(f"port {port} is not published")
        if binding.startswith("127.0.0.1:"):
            return passed(binding)
        return failed(
            f"bound to {binding}", remediation=f'publish as "127.0.0.1:{port}:{port}"'
        )

    return evaluate


def unexposed_check(
    runtime: ContainerFacts, service: str, port: int
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        if runtime.container_id(service) is None:
            return warned(f"{service} container not present (host mode likely)")
        binding = runtime.port_binding(service, port)
        if binding is not None:
            return failed(f"published on {binding}", remediation=f"remove {service} ports")
        return passed("internal only")

    return evaluate


def reachable_check(
    runtime: ContainerFacts, source: str, target: str, url: str
) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        if runtime.container_id(target) is None:
            return skipped(f"{target} container not present")
        if runtime.can_reach(source, url):
            return passed(url)
        return failed(f"{url} unreachable from {source}")

    return evaluate


def audit_check(runtime: ContainerFacts, service: str) -> Callable[[], Outcome]:
    def evaluate() -> Outcome:
        report = runtime.security_audit(service)
        summary = report.get("summary")
        critical = summary.get("critical") if isinstance(summary, dict) else None
        if isinstance(critical, bool) or not isinstance(critical, int):
            return failed("critical count is unknown")
        if critical == 0:
            return passed("0 critical")
        return failed(f"{critical} critical findings")

    return evaluate


def register_checks(
    checker: PostureChecker,
    settings: Settings,
    fs: FilesystemFacts,
    config: ConfigFacts,
    runtime: ContainerFacts,
) -> PostureChecker:
    """Register the gateway catalog on a checker, in reporting order."""
    fs_checks = [
        ("~/.openclaw permissions", settings.state_dir, "700"),
        ("openclaw.json permissions", settings.config_path, "600"),
        ("credentials directory permissions", settings.credentials_dir, "700"),
        ("telegram-token permissions", settings.telegram_token_path, "600"),
    ]
    for label, path, want in fs_checks:
        checker.register_check(
            label, permission_check(fs, path, want), CheckCategory.FILESYSTEM
        )

    config_checks = [
        (
            "gateway.auth.mode is token",
            equals_check(config, "gateway.auth.mode", "token"),
        ),
        (
            f"gateway.auth.token length >= {settings.min_token_length}",
            token_length_check(config, "gateway.auth.token", settings.min_token_length),
        ),
        (
            "telegram dmPolicy is allowlist",
            equals_check(config, "channels.telegram.dmPolicy", "allowlist"),
        ),
        (
            "telegram allowFrom is non-empty with no wildcard",
            allow_list_check(config, "channels.telegram.allowFrom"),
        ),
        (
            "telegram groupPolicy is not open",
            not_in_check(config, "channels.telegram.groupPolicy", {"open"}),
        ),
        (
            "tools.fs.workspaceOnly is true",
            is_true_check(config, "tools.fs.workspaceOnly"),
        ),
        (
            "tools.exec.applyPatch.workspaceOnly is true",
            is_true_check(config, "tools.exec.applyPatch.workspaceOnly"),
        ),
        (
            "logging.redactSensitive is enabled",
            not_in_check(config, "logging.redactSensitive", {"off"}),
        ),
    ]
    for label, evaluate in config_checks:
        checker.register_check(label, evaluate, CheckCategory.CONFIG)

    gateway = settings.gateway_service
    ollama = settings.ollama_service
    runtime_checks = [
        ("docker compose available", runtime_available_check(runtime)),
        ("gateway container is running", running_check(runtime, gateway)),
        (
            f"gateway runs as uid {settings.expected_uid}",
            uid_check(runtime, gateway, settings.expected_uid),
        ),
        ("gateway drops all capabilities", cap_drop_check(runtime, gateway)),
        ("docker.sock is not mounted", docker_sock_check(runtime, gateway)),
        ("gateway root filesystem is read-only", readonly_check(runtime, gateway)),
        (
            "gateway port is bound to 127.0.0.1",
            loopback_port_check(runtime, gateway, settings.gateway_port),
        ),
        (
            "ollama is not exposed to host",
            unexposed_check(runtime, ollama, settings.ollama_port),
        ),
        (
            "ollama is reachable from gateway",
            reachable_check(runtime, gateway, ollama, settings.ollama_url),
        ),
        ("security audit reports no critical findings", audit_check(runtime, gateway)),
    ]
    for label, evaluate in runtime_checks:
        checker.register_check(label, evaluate, CheckCategory.RUNTIME)

    return checker
