"""Combine the CLI version and the policy library version into one banner."""

from dataclasses import dataclass
from pathlib import Path

from casbin_cli.version.manifest import ManifestDependencyScanner, VersionQuery
from casbin_cli.version.oracle import VersionOracle

UNAVAILABLE = "version information unavailable"


@dataclass(frozen=True)
class VersionBanner:
    """Versions shown by ``casbin --version``."""

    tool_name: str
    tool_version: str
    library_name: str
    library_version: str | None

    def render(self) -> str:
        library_version = self.library_version or UNAVAILABLE
        return f"{self.tool_name} {self.tool_version}\n{self.library_name} {library_version}"


class VersionReporter:
    """Build the version banner from version control and the build manifest."""

    def __init__(
        self,
        oracle: VersionOracle | None = None,
        scanner: ManifestDependencyScanner | None = None,
    ):
        self.oracle = oracle or VersionOracle()
        self.scanner = scanner or ManifestDependencyScanner()

    def build_banner(
        self,
        tool_name: str,
        query: VersionQuery,
        document_path: str | Path,
        library_name: str | None = None,
    ) -> VersionBanner:
        """Resolve both versions. Errors from either lookup propagate as-is."""
        tool_version = self.oracle.resolve_tool_version()
        library_version = self.scanner.find_dependency_version(document_path, query)
        return VersionBanner(
            tool_name=tool_name,
            tool_version=tool_version,
            library_name=library_name or query.artifact_id,
            library_version=library_version,
        )
