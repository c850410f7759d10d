"""Rule registry. Every classification rule is a predicate registered via decorator.

Usage:
    @rule(id="R1.02", stage=Stage.FOUR_VERTICES, shape=ShapeType.RECTANGLE, confidence=0.90)
    def filled_quadrilateral(f: ShapeFeatures) -> bool:
        return f.vertices == 4 and f.extent > 0.45

Rules are evaluated in (stage, id) order and the first match wins, so the
tie-break between competing hypotheses is the registration order made explicit.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Union

from shapesight.engine.types import ShapeFeatures, ShapeType

logger = logging.getLogger(__name__)

Predicate = Callable[[ShapeFeatures], bool]
Confidence = Union[float, Callable[[ShapeFeatures], float]]


class Stage(enum.IntEnum):
    THREE_VERTICES = 0
    FOUR_VERTICES = 1
    FIVE_TO_SEVEN_VERTICES = 2
    CONCAVE = 3
    ROUND = 4
    FALLBACK = 5


@dataclass
class RuleSpec:
    id: str
    stage: Stage
    shape: ShapeType
    predicate: Predicate
    confidence: Confidence
    description: str = ""

    def matches(self, features: ShapeFeatures) -> bool:
        return bool(self.predicate(features))

    def score(self, features: ShapeFeatures) -> float:
        """Uncapped confidence for a blob this rule matched."""
        if callable(self.confidence):
            return float(self.confidence(features))
        return float(self.confidence)


class RuleRegistry:
    """Ordered collection of classification rules."""

    def __init__(self) -> None:
        self._rules: dict[str, RuleSpec] = {}

    def register(self, spec: RuleSpec) -> None:
        if spec.id in self._rules:
            raise ValueError(f"Duplicate rule ID: {spec.id}")
        self._rules[spec.id] = spec
        logger.debug("Registered rule %s (%s → %s)", spec.id, spec.stage.name, spec.shape.value)

    def get(self, rule_id: str) -> RuleSpec:
        return self._rules[rule_id]

    def get_stage(self, stage: Stage) -> list[RuleSpec]:
        specs = [s for s in self._rules.values() if s.stage == stage]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[RuleSpec]:
        return sorted(self._rules.values(), key=lambda s: (s.stage, s.id))

    def first_match(self, features: ShapeFeatures) -> RuleSpec | None:
        """Walk the rules in order; None means the blob is rejected."""
        for spec in self.all():
            if spec.matches(features):
                return spec
        return None

    @property
    def count(self) -> int:
        return len(self._rules)


# Module-level singleton
_registry = RuleRegistry()


def get_registry() -> RuleRegistry:
    return _registry


def rule(
    *,
    id: str,
    stage: Stage,
    shape: ShapeType,
    confidence: Confidence,
    description: str = "",
):
    """Decorator to register a classification predicate."""

    def decorator(fn: Predicate) -> Predicate:
        spec = RuleSpec(
            id=id,
            stage=stage,
            shape=shape,
            predicate=fn,
            confidence=confidence,
            description=description or (fn.__doc__ or "").strip(),
        )
        _registry.register(spec)
        return fn

    return decorator
