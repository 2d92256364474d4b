"""Общие утилиты тестов condcss."""

import os
import subprocess
import sys
import textwrap
from pathlib import Path

from condcss.config import CompilerOptions
from condcss.engine import compile_stylesheet, render_expression

REPO_ROOT = Path(__file__).resolve().parent.parent


def compile_css(text: str, concat_limit: int | None = None) -> str:
    """Компилирует таблицу стилей (с dedent) в выражение."""
    options = CompilerOptions(concat_limit=concat_limit) if concat_limit is not None else None
    return compile_stylesheet(textwrap.dedent(text), options)


def render(expression: str, **namespace) -> str:
    return render_expression(expression, namespace)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def run_cli(root: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env.pop("CONDCSS_CONCAT_LIMIT", None)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "condcss.cli", *args],
        cwd=root, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )
