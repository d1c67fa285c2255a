"""Consistency rule evaluation for StepOrchestrator."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from orchestrator.results import ConsistencyWarning
from steps.consistency import ConsistencyRule

logger = logging.getLogger(__name__)


class ConsistencyMixin:
    """
    Mixin providing consistency warnings.

    Every rule whose conditions all hold yields one warning, in declaration
    order. Warnings never change step status, gating or submission.
    """

    consistency_rules: tuple[ConsistencyRule, ...]

    def check_consistency(self, snapshot: Mapping[str, Any]) -> list[ConsistencyWarning]:
        warnings = [
            ConsistencyWarning(key=rule.key, message=rule.message, paths=list(rule.paths))
            for rule in self.consistency_rules
            if all(self._condition_holds(snapshot, condition) for condition in rule.all_of)
        ]
        if warnings:
            logger.debug(f"[{self.step_map.mode}] consistency warnings: {[w.key for w in warnings]}")
        return warnings
