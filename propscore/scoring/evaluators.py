"""Scorer primitives that map attribute values to sub-scores in [0, 100].

Each primitive is an immutable, callable description of one rubric rule.
Rubric profiles are built entirely out of these, so a profile stays data:
swapping thresholds or category scores never needs new code.

All primitives return ``None`` when an input they need is unknown. The
aggregator skips such criteria.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from propscore.models.enums import Category


def _dec(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _bands(pairs: tuple[tuple[Any, Any], ...]) -> tuple[tuple[Decimal, Decimal], ...]:
    return tuple((_dec(limit), _dec(score)) for limit, score in pairs)


class Evaluator:
    """Base class for scorer primitives."""

    arity: int = 1

    def __call__(self, *values: Any) -> Decimal | None:
        raise NotImplementedError


@dataclass(frozen=True)
class AtMostBands(Evaluator):
    """First band whose upper bound is ``>=`` the value wins.

    Bands are evaluated top-down and bounds are inclusive, so with a first
    band of ``(10, 100)`` a distance of exactly 10 scores 100.
    """

    bands: tuple[tuple[Decimal, Decimal], ...]
    otherwise: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "bands", _bands(self.bands))
        object.__setattr__(self, "otherwise", _dec(self.otherwise))

    def __call__(self, value: Any) -> Decimal | None:
        if value is None:
            return None
        value = _dec(value)
        for upper, score in self.bands:
            if value <= upper:
                return score
        return self.otherwise


@dataclass(frozen=True)
class AtLeastBands(Evaluator):
    """First band whose lower bound is ``<=`` the value wins."""

    bands: tuple[tuple[Decimal, Decimal], ...]
    otherwise: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "bands", _bands(self.bands))
        object.__setattr__(self, "otherwise", _dec(self.otherwise))

    def __call__(self, value: Any) -> Decimal | None:
        if value is None:
            return None
        value = _dec(value)
        for lower, score in self.bands:
            if value >= lower:
                return score
        return self.otherwise


@dataclass(frozen=True)
class CategoryScores(Evaluator):
    """Score a categorical value; unmapped members fall back to ``default``."""

    scores: Mapping[Category, Decimal]
    default: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "scores", {member: _dec(score) for member, score in self.scores.items()}
        )
        object.__setattr__(self, "default", _dec(self.default))

    def __hash__(self) -> int:
        return hash((tuple(self.scores.items()), self.default))

    def __call__(self, value: Any) -> Decimal | None:
        if value is None:
            return None
        return self.scores.get(value, self.default)


@dataclass(frozen=True)
class FlagScores(Evaluator):
    """Score a single boolean flag."""

    when_true: Decimal
    when_false: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "when_true", _dec(self.when_true))
        object.__setattr__(self, "when_false", _dec(self.when_false))

    def __call__(self, value: Any) -> Decimal | None:
        if value is None:
            return None
        return self.when_true if value else self.when_false


@dataclass(frozen=True)
class FlagCount(Evaluator):
    """Score by how many of several flags are true.

    ``scores[n]`` is the sub-score when exactly ``n`` flags are true, e.g.
    compliance is ``(20, 60, 100)`` for neither, one or both of building
    codes met and certificates present.
    """

    scores: tuple[Decimal, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", tuple(_dec(s) for s in self.scores))

    @property
    def arity(self) -> int:  # type: ignore[override]
        return len(self.scores) - 1

    def __call__(self, *flags: Any) -> Decimal | None:
        if any(flag is None for flag in flags):
            return None
        return self.scores[sum(1 for flag in flags if flag)]


@dataclass(frozen=True)
class TruthTable(Evaluator):
    """Look up a score by the truth values of several inputs.

    ``thresholds`` is aligned with the inputs: ``None`` means the input is
    already a boolean, a number means the input is tested as
    ``value >= threshold``. Title clarity, for instance, is::

        (clear, encumbered)  -> score
        (True,  False)       -> 100
        (True,  True)        -> 70
        (False, False)       -> 60
        (False, True)        -> 30
    """

    table: Mapping[tuple[bool, ...], Decimal]
    thresholds: tuple[Decimal | None, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "table", {key: _dec(score) for key, score in self.table.items()}
        )
        width = len(next(iter(self.table)))
        thresholds = tuple(None if t is None else _dec(t) for t in self.thresholds)
        object.__setattr__(self, "thresholds", thresholds or (None,) * width)
        if len(self.thresholds) != width or len(self.table) != 2**width:
            raise ValueError("truth table must cover every combination of its inputs")

    def __hash__(self) -> int:
        return hash((tuple(self.table.items()), self.thresholds))

    @property
    def arity(self) -> int:  # type: ignore[override]
        return len(self.thresholds)

    def __call__(self, *values: Any) -> Decimal | None:
        if any(value is None for value in values):
            return None
        key = tuple(
            bool(value) if threshold is None else _dec(value) >= threshold
            for value, threshold in zip(values, self.thresholds)
        )
        return self.table[key]


@dataclass(frozen=True)
class GuardedBands(Evaluator):
    """Numeric bands that a true guard flag overrides.

    Structural soundness scores ``guard_score`` whenever structural issues
    are present, regardless of age, and otherwise scores the age bands.
    """

    guard_score: Decimal
    bands: AtMostBands | AtLeastBands

    arity = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "guard_score", _dec(self.guard_score))

    def __call__(self, guard: Any, value: Any) -> Decimal | None:
        if guard:
            return self.guard_score
        if guard is None:
            return None
        return self.bands(value)
