"""Fact provider interfaces consumed by the check catalog."""

from pathlib import Path
from typing import Any, Protocol


class FilesystemFacts(Protocol):
    def permission_bits(self, path: Path) -> str | None:
        """Octal permission bits as `stat -c %a` prints them, None if missing."""
        ...


class ConfigFacts(Protocol):
    def get(self, path: str) -> Any:
        """Value at a dotted path in the config document, None if absent.

        Raises FactUnavailable when the document itself cannot be read.
        """
        ...


class ContainerFacts(Protocol):
    """Live facts about the compose stack.

    Every method raises FactUnavailable (RuntimeUnavailable when the runtime
    is missing) instead of guessing a value.
    """

    def ensure_available(self) -> str: ...

    def is_running(self, service: str) -> bool: ...

    def container_id(self, service: str) -> str | None: ...

    def effective_uid(self, service: str) -> str: ...

    def dropped_capabilities(self, service: str) -> list[str]: ...

    def mounts(self, service: str) -> list[dict[str, Any]]: ...

    def readonly_rootfs(self, service: str) -> bool: ...

    def port_binding(self, service: str, port: int) -> str | None: ...

    def can_reach(self, service: str, url: str) -> bool: ...

    def security_audit(self, service: str) -> dict[str, Any]: ...
