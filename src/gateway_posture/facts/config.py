"""Configuration facts from the gateway's JSON config file."""

import json
import logging
from pathlib import Path
from typing import Any

from gateway_posture.errors import FactUnavailable

logger = logging.getLogger(__name__)


def lookup(document: Any, path: str) -> Any:
    """Walk a dotted path through nested dicts, None if any step is missing."""
    node = document
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


class JsonConfigFile:
    """Lazily parsed config document; parsed once per instance."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._document: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._document is not None:
            return self._document
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise FactUnavailable(f"config file not found: {self.path}") from exc
        except OSError as exc:
            raise FactUnavailable(f"cannot read {self.path}: {exc.strerror}") from exc
        except UnicodeDecodeError as exc:
            raise FactUnavailable(f"{self.path} is not valid UTF-8") from exc
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FactUnavailable(f"invalid JSON in {self.path}: {exc.msg}") from exc
        if not isinstance(document, dict):
            raise FactUnavailable(f"{self.path} is not a JSON object")
        logger.debug("Loaded config from %s", self.path)
        self._document = document
        return document

    def get(self, path: str) -> Any:
        return lookup(self._load(), path)

