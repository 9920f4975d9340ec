"""Combinators — build one rule out of several with boolean logic.

Sub-rules are always evaluated with ``invert=False`` to decide validity;
the outer invert flag is applied to that single boolean afterwards. This
keeps ``combinator(v, invert=True)`` the exact opposite of
``combinator(v)``, which is what lets ``not_`` and ``one_of`` nest freely.

Failure reports merge the sub-rule failure maps and add a marker key named
after the combinator (``allOf``, ``anyOf``, ``oneOf``, ``not``) whose value
is ``not invert``. ``compose`` is plain AND without a marker.

When an inverted combinator fails, its sub-rules passed; the report then
carries the sub-rules' own inverted failure maps, which explain why each
one passed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from jsonrules.domain.outcome import VALID, FailureMap, Outcome, Rule, merge_details
from jsonrules.domain.rules import null_rule
from jsonrules.domain.values import is_empty, xor


def _present(rules: Iterable[Rule | None] | None) -> list[Rule]:
    if not rules:
        return []
    return [rule for rule in rules if rule is not None]


def _failures(outcomes: list[Outcome]) -> list[FailureMap]:
    return [outcome.errors for outcome in outcomes if not outcome.valid]


def _explain_passing(rules: list[Rule], outcomes: list[Outcome], value: Any) -> list[FailureMap]:
    """Inverted failure maps of the sub-rules that passed."""
    explained: list[FailureMap] = []
    for rule, outcome in zip(rules, outcomes, strict=True):
        if outcome.valid:
            inverted = rule(value, True)
            if not inverted.valid:
                explained.append(inverted.errors)
    return explained


def _combine(
    rules: Iterable[Rule | None] | None,
    accept: Callable[[int, int], bool],
    marker: str | None,
    *,
    report_both: bool = False,
) -> Rule:
    """Shared evaluation loop for the n-ary combinators.

    Args:
        rules: Sub-rules; ``None`` entries are ignored.
        accept: ``accept(passed, total)`` decides validity before inversion.
        marker: Name of the marker key added to failure reports, if any.
        report_both: Report failing and passing sub-rules on every failure
            (``oneOf``), instead of picking by the invert flag.
    """
    present = _present(rules)
    if not present:
        return null_rule

    def _combined(value: Any, invert: bool = False) -> Outcome:
        # Every sub-rule runs: failing details are needed for the report.
        outcomes = [rule(value) for rule in present]
        passed = sum(1 for outcome in outcomes if outcome.valid)
        if xor(accept(passed, len(present)), invert):
            return VALID
        if report_both:
            parts = _failures(outcomes) + _explain_passing(present, outcomes, value)
        elif invert:
            parts = _explain_passing(present, outcomes, value)
        else:
            parts = _failures(outcomes)
        if marker is not None:
            parts.append({marker: not invert})
        return Outcome.invalid(merge_details(*parts))

    return _combined


def all_of(rules: Iterable[Rule | None] | None) -> Rule:
    """Valid only if every sub-rule is valid."""
    return _combine(rules, lambda passed, total: passed == total, "allOf")


def any_of(rules: Iterable[Rule | None] | None) -> Rule:
    """Valid if at least one sub-rule is valid."""
    return _combine(rules, lambda passed, total: passed > 0, "anyOf")


def one_of(rules: Iterable[Rule | None] | None) -> Rule:
    """Valid only if exactly one sub-rule is valid.

    On failure both the failing sub-rules and the passing ones are
    reported, so a caller can see why the count was not exactly one.
    """
    return _combine(rules, lambda passed, total: passed == 1, "oneOf", report_both=True)


def compose(rules: Iterable[Rule | None] | None) -> Rule:
    """Plain conjunction, reported without an ``allOf`` marker."""
    return _combine(rules, lambda passed, total: passed == total, None)


def not_(rule: Rule | None) -> Rule:
    """Invert a single rule.

    An empty value is always valid, matching the leaf rules. Nesting
    ``not_(not_(rule))`` works but reads poorly.
    """
    if rule is None:
        return null_rule
    inner = rule

    def _not(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        outcome = inner(value, not invert)
        if outcome.valid:
            return VALID
        return Outcome.invalid(merge_details(outcome.errors, {"not": not invert}))

    return _not
