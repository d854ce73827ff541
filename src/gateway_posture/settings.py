"""Deployment layout and expected values for verification."""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_STATE_DIR = Path("~/.openclaw")
BASE_COMPOSE_FILE = "docker-compose.yml"
SECURE_COMPOSE_FILE = "docker-compose.secure.yml"


@dataclass(frozen=True)
class Settings:
    """Where the deployment lives and what a hardened one looks like."""

    state_dir: Path = DEFAULT_STATE_DIR
    project_dir: Path = Path(".")
    compose_files: tuple[Path, ...] = field(default_factory=tuple)
    gateway_service: str = "openclaw-gateway"
    gateway_port: int = 18789
    expected_uid: str = "1000"
    min_token_length: int = 24
    ollama_service: str = "ollama"
    ollama_port: int = 11434

    def __post_init__(self) -> None:
        # Frozen, so normalise through object.__setattr__
        object.__setattr__(self, "state_dir", Path(self.state_dir).expanduser())
        object.__setattr__(self, "project_dir", Path(self.project_dir).expanduser())
        if not self.compose_files:
            object.__setattr__(
                self,
                "compose_files",
                (
                    self.project_dir / BASE_COMPOSE_FILE,
                    self.project_dir / SECURE_COMPOSE_FILE,
                ),
            )
        else:
            object.__setattr__(
                self,
                "compose_files",
                tuple(Path(p).expanduser() for p in self.compose_files),
            )

    @property
    def config_path(self) -> Path:
        return self.state_dir / "openclaw.json"

    @property
    def credentials_dir(self) -> Path:
        return self.state_dir / "credentials"

    @property
    def telegram_token_path(self) -> Path:
        return self.credentials_dir / "telegram-token"

    @property
    def ollama_url(self) -> str:
        """URL the gateway uses to reach ollama over the internal network."""
        return f"http://{self.ollama_service}:{self.ollama_port}/api/tags"
