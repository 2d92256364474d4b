from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import CompilerOptions, DEFAULT_CONFIG_NAME, load_options
from .engine import compile_stylesheet, render_stylesheet, run_report
from .errors import CondCssUserError
from .expr.evaluator import EvaluationError
from .expr.parser import ExpressionSyntaxError
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="condcss",
        description="Compile stylesheets with runtime @if/@elseif/@else into string expressions",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="отладочный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для всех команд
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("source", help="файл таблицы стилей или - для чтения из stdin")
        sp.add_argument(
            "--config",
            metavar="PATH",
            help=f"YAML-конфигурация (по умолчанию ./{DEFAULT_CONFIG_NAME}, если есть)",
        )
        sp.add_argument(
            "--concat-limit",
            type=int,
            metavar="N",
            help="максимальная длина цепочки конкатенаций до разрыва группы",
        )

    sp_compile = sub.add_parser("compile", help="Печатает скомпилированное выражение")
    add_common(sp_compile)

    sp_render = sub.add_parser("render", help="Компилирует и вычисляет выражение в CSS")
    add_common(sp_render)
    sp_render.add_argument(
        "--set",
        action="append",
        metavar="NAME=VALUE",
        help="значение имени времени выполнения: true, false, null, число или строка (можно указать несколько)",
    )

    sp_report = sub.add_parser("report", help="JSON-отчёт: выражение и статистика")
    add_common(sp_report)

    return p


def _setup_logging(verbose: bool) -> None:
    if not verbose and not os.environ.get("CONDCSS_DEBUG"):
        return
    logger = logging.getLogger("condcss")
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise ValueError(f"Stylesheet not found: {path}")
    return path.read_text(encoding="utf-8")


def _options(ns: argparse.Namespace) -> CompilerOptions:
    if ns.config:
        config_path = Path(ns.config)
        if not config_path.is_file():
            raise ValueError(f"Config file not found: {config_path}")
    else:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME

    options = load_options(config_path)
    if ns.concat_limit is not None:
        options = CompilerOptions(concat_limit=ns.concat_limit)
    return options


def _parse_value(raw: str) -> Any:
    """Парсит значение --set: true/false/null, число или строка как есть."""
    text = raw.strip()
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return raw


def _parse_namespace(assignments: Optional[List[str]]) -> Dict[str, Any]:
    """
    Парсит список 'NAME=VALUE' в пространство имён.

    Точечные имена (a.b=1) создают вложенные словари.
    """
    namespace: Dict[str, Any] = {}
    for item in assignments or []:
        if "=" not in item:
            raise ValueError(f"Invalid --set format '{item}'. Expected 'NAME=VALUE'")
        name, raw = item.split("=", 1)
        path = [part.strip() for part in name.split(".")]
        if not all(path):
            raise ValueError(f"Invalid name in --set '{item}'")

        target = namespace
        for part in path[:-1]:
            nested = target.setdefault(part, {})
            if not isinstance(nested, dict):
                raise ValueError(f"Conflicting --set for '{part}'")
            target = nested
        target[path[-1]] = _parse_value(raw)
    return namespace


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        text = _read_source(ns.source)
        options = _options(ns)

        if ns.cmd == "compile":
            sys.stdout.write(compile_stylesheet(text, options) + "\n")
            return 0

        if ns.cmd == "render":
            namespace = _parse_namespace(ns.set)
            sys.stdout.write(render_stylesheet(text, namespace, options) + "\n")
            return 0

        if ns.cmd == "report":
            source = None if ns.source == "-" else Path(ns.source)
            report = run_report(text, options, source=source)
            sys.stdout.write(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n")
            return 0

    except (CondCssUserError, ExpressionSyntaxError, EvaluationError) as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
