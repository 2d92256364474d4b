"""
condcss: компилятор таблиц стилей с условиями времени выполнения.

Таблица стилей с блоками @if/@elseif/@else и значениями eval("...")
компилируется в одно выражение, которое при вычислении даёт итоговый CSS.
"""

from __future__ import annotations

from .config import CompilerOptions, load_options
from .engine import (
    compile_stylesheet,
    compile_tree,
    render_expression,
    render_stylesheet,
    run_report,
)
from .errors import (
    CompilerError,
    CondCssUserError,
    ConditionalChainError,
    ConfigError,
    StylesheetSyntaxError,
)

__all__ = [
    "CompilerOptions",
    "load_options",
    "compile_stylesheet",
    "compile_tree",
    "render_expression",
    "render_stylesheet",
    "run_report",
    "CompilerError",
    "CondCssUserError",
    "ConditionalChainError",
    "ConfigError",
    "StylesheetSyntaxError",
]
