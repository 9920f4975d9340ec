"""Field capability: the host object that supplies a value to validate.

Rules never see the field itself: the value is read once through
``get_value()`` and evaluated as a snapshot.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from jsonrules.domain.outcome import Outcome, Rule


@runtime_checkable
class Field(Protocol):
    """Anything that can hand over its current value."""

    def get_value(self) -> Any: ...


@dataclass(frozen=True)
class StaticField:
    """A field holding a fixed value."""

    value: Any = None

    def get_value(self) -> Any:
        return self.value


def validate_field(field: Field, rule: Rule, *, invert: bool = False) -> Outcome:
    """Evaluate *rule* against a deep-copied snapshot of *field*'s value."""
    snapshot = copy.deepcopy(field.get_value())
    return rule(snapshot, invert)
