"""
JSON report of a compilation run.

The report is a pydantic model so the CLI can dump it with
`model_dump(mode="json")`.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .stylesheet.nodes import (
    ConditionalBlockNode,
    ConditionalRuleNode,
    DotPathValue,
    RuntimeExpressionValue,
    StyleNode,
)
from .walker import HandlerRegistry, TreeWalker


class ReportOptions(BaseModel):
    concat_limit: int


class ReportStats(BaseModel):
    conditional_blocks: int = 0
    conditional_rules: int = 0
    max_conditional_depth: int = 0
    runtime_values: int = 0
    conditions: List[str] = Field(default_factory=list)


class CompileReport(BaseModel):
    protocol: int = 1
    tool_version: str
    source: Optional[str] = None
    expression: str
    length: int
    group_breaks: int
    options: ReportOptions
    stats: ReportStats


class _StatsCollector:
    """Collects conditional/runtime-value statistics over the AST."""

    def __init__(self):
        self.stats = ReportStats()
        self._depth = 0

    def collect(self, root: StyleNode) -> ReportStats:
        registry = HandlerRegistry()
        registry.register(ConditionalBlockNode, enter=self._enter_block, leave=self._leave_block)
        registry.register(ConditionalRuleNode, enter=self._enter_rule)
        registry.register(RuntimeExpressionValue, enter=self._count_value)
        registry.register(DotPathValue, enter=self._count_value)
        TreeWalker(registry).walk(root)
        return self.stats

    def _enter_block(self, node: ConditionalBlockNode) -> bool:
        self._depth += 1
        self.stats.conditional_blocks += 1
        self.stats.max_conditional_depth = max(self.stats.max_conditional_depth, self._depth)
        return True

    def _leave_block(self, node: ConditionalBlockNode) -> None:
        self._depth -= 1

    def _enter_rule(self, node: ConditionalRuleNode) -> bool:
        self.stats.conditional_rules += 1
        if node.condition is not None and node.condition not in self.stats.conditions:
            self.stats.conditions.append(node.condition)
        return True

    def _count_value(self, node: StyleNode) -> bool:
        self.stats.runtime_values += 1
        return False


def collect_stats(root: StyleNode) -> ReportStats:
    return _StatsCollector().collect(root)


__all__ = ["CompileReport", "ReportOptions", "ReportStats", "collect_stats"]
