"""Fact providers for filesystem, configuration and container state."""

from .config import JsonConfigFile
from .docker import DockerCompose
from .filesystem import LocalFilesystem
from .types import ConfigFacts, ContainerFacts, FilesystemFacts

__all__ = [
    "ConfigFacts",
    "ContainerFacts",
    "DockerCompose",
    "FilesystemFacts",
    "JsonConfigFile",
    "LocalFilesystem",
]
