"""
Streaming lookup of a dependency version in a Maven pom.xml.

The document is read as a sequence of SAX events; no element tree is built,
and parsing stops as soon as the requested version has been found.
"""

import xml.sax
from dataclasses import dataclass
from pathlib import Path

from casbin_cli.config import get_logger
from casbin_cli.exceptions import ManifestReadError

logger = get_logger("manifest")

RECORD = "dependency"
GROUP_ID = "groupId"
ARTIFACT_ID = "artifactId"
VERSION = "version"
_FIELDS = (GROUP_ID, ARTIFACT_ID, VERSION)


@dataclass(frozen=True)
class VersionQuery:
    """The (groupId, artifactId) key of the dependency to look up."""

    group_id: str
    artifact_id: str


@dataclass
class ScanState:
    """Mutable state of a single scan."""

    current_element: str = ""
    current_group_id: str | None = None
    current_artifact_id: str | None = None
    inside_record: bool = False
    resolved_version: str | None = None


class _ScanComplete(Exception):
    """Raised from a callback to stop the parser once the version is known."""


class DependencyHandler(xml.sax.handler.ContentHandler):
    """
    SAX handler that tracks dependency records as a flat state machine.

    Outside a ``dependency`` element all events are ignored. Inside one, the
    name of the most recently opened element decides which field the text
    belongs to. Text for a field is buffered until the field closes, since the
    parser may deliver it in several chunks.
    """

    def __init__(self, query: VersionQuery):
        super().__init__()
        self.query = query
        self.state = ScanState()
        self._text: list[str] = []

    @property
    def version(self) -> str | None:
        return self.state.resolved_version

    def _matches(self) -> bool:
        return (
            self.state.current_group_id == self.query.group_id
            and self.state.current_artifact_id == self.query.artifact_id
        )

    def startElement(self, name, attrs):
        state = self.state
        if not state.inside_record:
            if name == RECORD:
                state.inside_record = True
                state.current_group_id = None
                state.current_artifact_id = None
            return

        state.current_element = name
        self._text.clear()

    def characters(self, content):
        if self.state.inside_record and self.state.current_element in _FIELDS:
            self._text.append(content)

    def endElement(self, name):
        state = self.state
        if not state.inside_record:
            return

        if name == RECORD:
            state.inside_record = False
            state.current_element = ""
            return

        # Fields with no text keep their previous value
        value = "".join(self._text).strip()
        if name == state.current_element and value:
            self._capture(name, value)
        state.current_element = ""
        self._text.clear()

    def _capture(self, field: str, value: str) -> None:
        state = self.state
        if field == GROUP_ID:
            state.current_group_id = value
        elif field == ARTIFACT_ID:
            state.current_artifact_id = value
        elif field == VERSION and state.resolved_version is None and self._matches():
            state.resolved_version = value
            raise _ScanComplete()


class ManifestDependencyScanner:
    """Find the declared version of one dependency in a build manifest."""

    def find_dependency_version(self, document_path: str | Path, query: VersionQuery) -> str | None:
        """Scan the manifest for the first dependency matching ``query``.

        Args:
            document_path: Path to the pom.xml file
            query: groupId/artifactId of the dependency

        Returns:
            The declared version, or None if no record matches

        Raises:
            ManifestReadError: If the file cannot be opened or is not well-formed XML
        """
        path = Path(document_path)
        handler = DependencyHandler(query)

        parser = xml.sax.make_parser()
        parser.setFeature(xml.sax.handler.feature_namespaces, False)
        parser.setFeature(xml.sax.handler.feature_external_ges, False)
        parser.setFeature(xml.sax.handler.feature_external_pes, False)
        parser.setContentHandler(handler)

        try:
            with open(path, "rb") as f:
                parser.parse(f)
        except _ScanComplete:
            pass
        except OSError as e:
            logger.error("Manifest could not be opened", path=str(path), error=str(e))
            raise ManifestReadError(path, e.strerror or str(e)) from e
        except xml.sax.SAXException as e:
            logger.error("Manifest is not well-formed", path=str(path), error=str(e))
            raise ManifestReadError(path, str(e)) from e

        if handler.version is None:
            logger.debug(
                "Dependency not declared",
                path=str(path),
                group_id=query.group_id,
                artifact_id=query.artifact_id,
            )
        return handler.version


def find_dependency_version(document_path: str | Path, query: VersionQuery) -> str | None:
    """Convenience wrapper around ManifestDependencyScanner."""
    return ManifestDependencyScanner().find_dependency_version(document_path, query)
