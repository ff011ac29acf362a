"""Formatter protocol shared by document and viewer formatters."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, TextIO

from api_doc_registrar.registry import RegistrySnapshot


class Formatter(ABC):
    """Renders a registry snapshot into one output format.

    `render` is a pure function of the snapshot. `write` fails only when the
    sink does, and that error reaches the caller unchanged.
    """

    content_type: ClassVar[str]

    @abstractmethod
    def render(self, snapshot: RegistrySnapshot) -> Any:
        """Build the document for the given snapshot."""

    @abstractmethod
    def write(self, document: Any, sink: TextIO) -> None:
        """Serialize a document produced by `render` to the sink."""
