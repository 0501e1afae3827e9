"""Persona documents read from a directory on disk."""

from __future__ import annotations

from pathlib import Path

from ....core.domain.exceptions import PersonaDocumentError
from ....core.ports.persona_port import PersonaSourcePort


class FilePersonaSource(PersonaSourcePort):
    """Loads persona documents by file name from ``directory``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def load(self, name: str) -> str:
        path = self.directory / name
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersonaDocumentError(
                f"Could not read persona document {name}",
                cause=e,
                context={"path": str(path)},
            ) from e
