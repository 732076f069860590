"""Astroid Gateway - symbol resolution for in-memory documents."""

from pathlib import PurePath

import astroid  # type: ignore[import-untyped]

from line_length_analyzer.domain.entities import Document
from line_length_analyzer.domain.errors import ProjectInvalidError


class AstroidGateway:
    """Builds astroid modules from documents without touching the filesystem."""

    @staticmethod
    def module_name(document: Document) -> str:
        return PurePath(document.path).stem

    def parse_document(self, document: Document) -> astroid.nodes.Module:
        """Parse a document. Raises ProjectInvalidError when astroid rejects it."""
        try:
            return astroid.parse(
                document.text,
                module_name=self.module_name(document),
                path=document.path,
            )
        except astroid.AstroidSyntaxError as exc:
            raise ProjectInvalidError(document.name, str(exc)) from exc
