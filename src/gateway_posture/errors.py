"""Error types raised while gathering facts."""


class PostureError(Exception):
    """Base class for gateway-posture errors."""


class FactUnavailable(PostureError):
    """A fact could not be obtained (tool missing, command failed, bad output)."""


class RuntimeUnavailable(FactUnavailable):
    """The container runtime is not installed or not usable."""
