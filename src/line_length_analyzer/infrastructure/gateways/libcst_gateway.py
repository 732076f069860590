"""LibCST based source toolkit: parsing, formatting normalisation and fix application."""

import re
from collections.abc import Sequence
from typing import Optional, Union

import libcst as cst

from line_length_analyzer.domain.entities import (
    Document,
    Project,
    TransformationPlan,
    TransformationType,
)
from line_length_analyzer.domain.errors import ProjectInvalidError
from line_length_analyzer.domain.protocols import FixerGatewayProtocol, SourceToolkitProtocol
from line_length_analyzer.infrastructure.gateways.transformers import (
    MoveTrailingCommentTransformer,
    WrapCallArgumentsTransformer,
)

_TRAILING_WHITESPACE = re.compile(r"[ \t]+(?=\r\n|\r|\n|\Z)")


class LibCSTToolkit(SourceToolkitProtocol):
    """Turns documents into libcst modules; the CST renders back to the exact source text."""

    def parse(self, document: Document) -> cst.Module:
        try:
            return cst.parse_module(document.text)
        except cst.ParserSyntaxError as exc:
            raise ProjectInvalidError(
                document.name, f"line {exc.raw_line}, column {exc.raw_column}: {exc.message}"
            ) from exc

    def normalize(self, project: Project) -> Project:
        """Strip trailing spaces and tabs from every line, keeping line terminators."""
        normalized = project
        for document in project.documents:
            text = _TRAILING_WHITESPACE.sub("", document.text)
            if text != document.text:
                normalized = normalized.with_document_text(document.name, text)
        return normalized


class LibCSTFixerGateway(FixerGatewayProtocol):
    """Gateway for applying safe code modifications using LibCST."""

    def __init__(self, toolkit: Optional[SourceToolkitProtocol] = None) -> None:
        self.toolkit = toolkit or LibCSTToolkit()

    def _plan_to_transformer(self, plan: TransformationPlan) -> cst.CSTTransformer:
        """Convert a TransformationPlan to a LibCST transformer."""
        t = plan.transformation_type
        if t == TransformationType.MOVE_TRAILING_COMMENT:
            return MoveTrailingCommentTransformer(plan.params)
        elif t == TransformationType.WRAP_CALL_ARGUMENTS:
            return WrapCallArgumentsTransformer(plan.params)
        else:
            raise ValueError(f"Unknown transformation type: {plan.transformation_type}")

    def apply_plans(
        self,
        document: Document,
        fixes: Sequence[Union[TransformationPlan, cst.CSTTransformer]],
    ) -> str:
        """
        Apply fixes in order and return the resulting source.

        Each transformer sees the output of the previous one, wrapped in a fresh
        MetadataWrapper so position metadata always matches the current text.
        """
        module = self.toolkit.parse(document)
        for fix in fixes:
            if isinstance(fix, TransformationPlan):
                transformer = self._plan_to_transformer(fix)
            else:
                transformer = fix
            module = cst.MetadataWrapper(module).visit(transformer)
        return module.code
