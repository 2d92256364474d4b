"""
Main processing pipeline.

source text → parser → AST → ExpressionCompiler → expression → (evaluator)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from .compiler import ExpressionCompiler
from .config import CompilerOptions
from .expr.evaluator import evaluate_expression, to_text
from .report import CompileReport, ReportOptions, collect_stats
from .stylesheet import StylesheetNode, parse_stylesheet
from .version import tool_version

logger = logging.getLogger(__name__)


def compile_tree(root: StylesheetNode, options: Optional[CompilerOptions] = None) -> str:
    """Compile a ready AST into an expression."""
    return ExpressionCompiler(options).compile(root)


def compile_stylesheet(text: str, options: Optional[CompilerOptions] = None) -> str:
    """
    Compile stylesheet source text into an expression.

    Raises:
        StylesheetSyntaxError: On invalid source text
        ConditionalChainError: On malformed @if/@elseif/@else chain
    """
    return compile_tree(parse_stylesheet(text), options)


def render_expression(expression: str, namespace: Optional[Mapping[str, Any]] = None) -> str:
    """Evaluate a compiled expression into CSS text."""
    return to_text(evaluate_expression(expression, namespace))


def render_stylesheet(
    text: str,
    namespace: Optional[Mapping[str, Any]] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """Compile the stylesheet and immediately resolve it with the given runtime values."""
    return render_expression(compile_stylesheet(text, options), namespace)


def run_report(
    text: str,
    options: Optional[CompilerOptions] = None,
    source: Optional[Path] = None,
) -> CompileReport:
    """Entry point for report generation."""
    options = options or CompilerOptions()
    root = parse_stylesheet(text)

    compiler = ExpressionCompiler(options)
    expression = compiler.compile(root)
    stats = collect_stats(root)
    logger.debug(
        "Report: %d conditional block(s), %d runtime value(s)",
        stats.conditional_blocks, stats.runtime_values,
    )

    return CompileReport(
        tool_version=tool_version(),
        source=str(source) if source is not None else None,
        expression=expression,
        length=len(expression),
        group_breaks=compiler.group_breaks,
        options=ReportOptions(concat_limit=options.concat_limit),
        stats=stats,
    )


__all__ = [
    "compile_tree",
    "compile_stylesheet",
    "render_expression",
    "render_stylesheet",
    "run_report",
]
