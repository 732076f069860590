"""Fix provider for LineLengthAnalyzer diagnostics."""

from functools import partial
from typing import Optional

from line_length_analyzer.domain.cancellation import CancellationToken
from line_length_analyzer.domain.constants import LINE_LENGTH_RULE_ID
from line_length_analyzer.domain.entities import (
    Diagnostic,
    Document,
    FixAction,
    Project,
    TransformationPlan,
)
from line_length_analyzer.domain.protocols import FixerGatewayProtocol
from line_length_analyzer.infrastructure.gateways.libcst_gateway import LibCSTFixerGateway

MOVE_COMMENT_TITLE = "Move trailing comment above statement"
WRAP_ARGUMENTS_TITLE = "Wrap call arguments"


class LineLengthFixProvider:
    """
    Offers fixes that shorten the line a diagnostic points at.

    Only fixes that actually change the document are offered, in a fixed
    order: moving a trailing comment first, wrapping call arguments second.
    """

    fixable_rule_ids: tuple[str, ...] = (LINE_LENGTH_RULE_ID,)

    def __init__(
        self,
        fixer_gateway: Optional[FixerGatewayProtocol] = None,
        indent: str = "    ",
    ) -> None:
        self.fixer_gateway = fixer_gateway or LibCSTFixerGateway()
        self.indent = indent

    def offer_fixes(
        self,
        project: Project,
        diagnostic: Diagnostic,
        cancellation: CancellationToken,
    ) -> list[FixAction]:
        if diagnostic.rule_id not in self.fixable_rule_ids or diagnostic.line < 1:
            return []
        try:
            document = project.get_document(diagnostic.path)
        except KeyError:
            return []

        candidates = (
            (MOVE_COMMENT_TITLE, TransformationPlan.move_trailing_comment(diagnostic.line)),
            (WRAP_ARGUMENTS_TITLE, TransformationPlan.wrap_call_arguments(diagnostic.line, self.indent)),
        )
        actions: list[FixAction] = []
        for title, plan in candidates:
            cancellation.raise_if_cancelled()
            if self.fixer_gateway.apply_plans(document, [plan]) == document.text:
                continue
            actions.append(
                FixAction(
                    title=title,
                    apply=partial(self._apply, document.name, plan),
                    equivalence_key=plan.transformation_type.value,
                )
            )
        return actions

    def _apply(
        self,
        document_name: str,
        plan: TransformationPlan,
        project: Project,
        cancellation: CancellationToken,
    ) -> Project:
        cancellation.raise_if_cancelled()
        document: Document = project.get_document(document_name)
        return project.with_document_text(
            document_name, self.fixer_gateway.apply_plans(document, [plan])
        )
