"""Unit tests for the line length LibCST transformers."""

import libcst as cst

from line_length_analyzer.infrastructure.gateways.transformers import (
    MoveTrailingCommentTransformer,
    WrapCallArgumentsTransformer,
)


def run(transformer: cst.CSTTransformer, source: str) -> str:
    return cst.MetadataWrapper(cst.parse_module(source)).visit(transformer).code


class TestMoveTrailingCommentTransformer:
    """Test MoveTrailingCommentTransformer."""

    def test_moves_comment_above_statement(self) -> None:
        transformer = MoveTrailingCommentTransformer({"target_line": 2})

        code = run(transformer, "x = 1\ny = 2  # explain y\n")

        assert code == "x = 1\n# explain y\ny = 2\n"
        assert transformer.applied

    def test_keeps_block_indentation(self) -> None:
        source = "def f():\n    return 1  # one\n"

        code = run(MoveTrailingCommentTransformer({"target_line": 2}), source)

        assert code == "def f():\n    # one\n    return 1\n"

    def test_other_lines_untouched(self) -> None:
        source = "x = 1  # keep\ny = 2  # keep too\n"
        transformer = MoveTrailingCommentTransformer({"target_line": 3})

        assert run(transformer, source) == source
        assert not transformer.applied

    def test_statement_without_comment_untouched(self) -> None:
        source = "x = 1\n"
        assert run(MoveTrailingCommentTransformer({"target_line": 1}), source) == source

    def test_multi_line_statement_uses_last_line(self) -> None:
        source = "x = (\n    1\n)  # done\n"

        code = run(MoveTrailingCommentTransformer({"target_line": 3}), source)

        assert code == "# done\nx = (\n    1\n)\n"


class TestWrapCallArgumentsTransformer:
    """Test WrapCallArgumentsTransformer."""

    def test_wraps_arguments_one_per_line(self) -> None:
        transformer = WrapCallArgumentsTransformer({"target_line": 1})

        code = run(transformer, "result = compute(alpha, beta)\n")

        assert code == "result = compute(\n    alpha,\n    beta,\n)\n"
        assert transformer.applied

    def test_wraps_outermost_call_only(self) -> None:
        code = run(WrapCallArgumentsTransformer({"target_line": 1}), "print(str(a), b)\n")

        assert code == "print(\n    str(a),\n    b,\n)\n"

    def test_keyword_arguments(self) -> None:
        code = run(WrapCallArgumentsTransformer({"target_line": 1}), "f(a, key=value)\n")

        assert code == "f(\n    a,\n    key=value,\n)\n"

    def test_respects_block_indentation_and_custom_indent(self) -> None:
        source = "def g():\n    return f(a, b)\n"

        code = run(WrapCallArgumentsTransformer({"target_line": 2, "indent": "  "}), source)

        assert code == "def g():\n    return f(\n      a,\n      b,\n    )\n"

    def test_skips_call_without_arguments(self) -> None:
        source = "value = compute()\n"
        assert run(WrapCallArgumentsTransformer({"target_line": 1}), source) == source

    def test_skips_bare_generator_argument(self) -> None:
        source = "total = sum(x for x in items)\n"
        assert run(WrapCallArgumentsTransformer({"target_line": 1}), source) == source

    def test_skips_statements_on_other_lines(self) -> None:
        source = "a = f(1, 2)\nb = f(3, 4)\n"

        code = run(WrapCallArgumentsTransformer({"target_line": 2}), source)

        assert code == "a = f(1, 2)\nb = f(\n    3,\n    4,\n)\n"

    def test_skips_multi_line_statement(self) -> None:
        source = "a = f(1,\n      2)\n"
        assert run(WrapCallArgumentsTransformer({"target_line": 1}), source) == source
