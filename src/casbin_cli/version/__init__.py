"""Version resolution for the CLI and the policy library it ships with."""

from .manifest import ManifestDependencyScanner, VersionQuery, find_dependency_version
from .oracle import VersionOracle
from .reporter import VersionBanner, VersionReporter

__all__ = [
    "ManifestDependencyScanner",
    "VersionQuery",
    "find_dependency_version",
    "VersionOracle",
    "VersionBanner",
    "VersionReporter",
]
