"""Security posture verification for a self-hosted gateway deployment."""

__version__ = "0.1.0"
