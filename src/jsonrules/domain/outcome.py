"""Outcome (the result every rule returns) and the error merger.

INVARIANT: Validation failures are ordinary ``Outcome`` values, never
exceptions. A FailureMap is keyed by the names of the rules or combinators
that failed; merging never drops a key present in any input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from pydantic import BaseModel, Field

FailureMap = dict[str, Any]


class Outcome(BaseModel):
    """Result of evaluating a rule against a value.

    Attributes:
        valid: Whether the value satisfied the rule.
        errors: FailureMap of rule name to failure detail; empty when valid.
    """

    model_config = {"frozen": True}

    valid: bool
    errors: FailureMap = Field(default_factory=dict)

    @classmethod
    def invalid(cls, errors: Mapping[str, Any]) -> Outcome:
        """Build a failed outcome carrying *errors*."""
        return cls(valid=False, errors=dict(errors))


VALID = Outcome(valid=True)


class Rule(Protocol):
    """An invertible predicate over a value."""

    def __call__(self, value: Any, invert: bool = False) -> Outcome: ...


def merge_details(*maps: Mapping[str, Any] | None) -> FailureMap:
    """Union FailureMaps left to right.

    When a key appears in more than one map, the later map wins. This can
    hide an earlier failure that happened to share a key (e.g. a nested
    ``allOf`` inside an ``anyOf``); it is kept for compatibility with
    existing reports.
    """
    merged: FailureMap = {}
    for current in maps:
        if current:
            merged.update(current)
    return merged


def merge_outcomes(outcomes: Iterable[Outcome]) -> Outcome:
    """Merge the failure maps of every invalid outcome.

    Returns ``VALID`` when none of *outcomes* failed.
    """
    failed = [outcome.errors for outcome in outcomes if not outcome.valid]
    if not failed:
        return VALID
    return Outcome.invalid(merge_details(*failed))
