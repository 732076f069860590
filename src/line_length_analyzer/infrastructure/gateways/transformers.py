"""LibCST Transformers for line length fixes."""

from typing import Optional

import libcst as cst
from libcst.metadata import PositionProvider


class MoveTrailingCommentTransformer(cst.CSTTransformer):
    """Moves the trailing comment of the statement ending on ``target_line`` onto its own line above it."""

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, context: dict) -> None:
        super().__init__()
        self.target_line: int = context["target_line"]
        self.applied = False

    def leave_SimpleStatementLine(
        self, original_node: cst.SimpleStatementLine, updated_node: cst.SimpleStatementLine
    ) -> cst.SimpleStatementLine:
        if self.applied:
            return updated_node
        trailing = updated_node.trailing_whitespace
        if trailing.comment is None:
            return updated_node
        position = self.get_metadata(PositionProvider, original_node)
        if position.end.line != self.target_line:
            return updated_node

        self.applied = True
        comment_line = cst.EmptyLine(
            indent=True,
            whitespace=cst.SimpleWhitespace(""),
            comment=trailing.comment,
        )
        return updated_node.with_changes(
            leading_lines=[*updated_node.leading_lines, comment_line],
            trailing_whitespace=trailing.with_changes(
                whitespace=cst.SimpleWhitespace(""), comment=None
            ),
        )


class WrapCallArgumentsTransformer(cst.CSTTransformer):
    """
    Puts every argument of the outermost call of a single-line statement on its own line.

    Produces a hanging indent, a trailing comma, and the closing parenthesis
    on a line of its own:

        result = compute(
            alpha,
            beta,
        )
    """

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, context: dict) -> None:
        super().__init__()
        self.target_line: int = context["target_line"]
        self.indent: str = context.get("indent", "    ")
        self.applied = False
        self._in_target = False
        self._target: Optional[cst.Call] = None

    def visit_SimpleStatementLine(self, node: cst.SimpleStatementLine) -> bool:
        position = self.get_metadata(PositionProvider, node)
        self._in_target = (
            not self.applied
            and position.start.line == position.end.line == self.target_line
        )
        return self._in_target

    def leave_SimpleStatementLine(
        self, original_node: cst.SimpleStatementLine, updated_node: cst.SimpleStatementLine
    ) -> cst.SimpleStatementLine:
        self._in_target = False
        return updated_node

    def visit_Call(self, node: cst.Call) -> None:
        if self._in_target and self._target is None and self._can_wrap(node):
            self._target = node

    def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.Call:
        if original_node is not self._target:
            return updated_node
        self._target = None
        self.applied = True
        return self._wrap(updated_node)

    @staticmethod
    def _can_wrap(node: cst.Call) -> bool:
        if not node.args:
            return False
        # A bare generator argument does not accept a trailing comma.
        if len(node.args) == 1:
            value = node.args[0].value
            if isinstance(value, cst.GeneratorExp) and not value.lpar:
                return False
        return True

    def _line_break(self, extra_indent: str) -> cst.ParenthesizedWhitespace:
        return cst.ParenthesizedWhitespace(
            first_line=cst.TrailingWhitespace(),
            empty_lines=[],
            indent=True,
            last_line=cst.SimpleWhitespace(extra_indent),
        )

    def _wrap(self, call: cst.Call) -> cst.Call:
        last_index = len(call.args) - 1
        args = [
            arg.with_changes(
                whitespace_after_arg=cst.SimpleWhitespace(""),
                comma=cst.Comma(
                    whitespace_before=cst.SimpleWhitespace(""),
                    whitespace_after=self._line_break("" if index == last_index else self.indent),
                ),
            )
            for index, arg in enumerate(call.args)
        ]
        return call.with_changes(
            whitespace_before_args=self._line_break(self.indent),
            args=args,
        )
