"""Filesystem facts read from the local host."""

import os
import stat
from pathlib import Path

from gateway_posture.errors import FactUnavailable


class LocalFilesystem:
    """Reads permission bits with os.stat."""

    def permission_bits(self, path: Path) -> str | None:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise FactUnavailable(f"cannot stat {path}: {exc.strerror}") from exc
        return format(stat.S_IMODE(st.st_mode), "o")
