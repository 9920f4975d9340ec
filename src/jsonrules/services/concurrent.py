"""Async rule composition — run async checks together, then merge.

This sits outside the synchronous core: an async rule is any coroutine
function ``async def rule(value) -> Outcome``. All of them are started at
once and awaited to completion; there is no short-circuit and no
cancellation of the remaining checks when one fails.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from typing import Any, Protocol

from jsonrules.domain.outcome import VALID, Outcome, merge_outcomes


class AsyncRule(Protocol):
    def __call__(self, value: Any) -> Awaitable[Outcome]: ...


async def _always_valid(value: Any) -> Outcome:
    return VALID


def compose_async(rules: Iterable[AsyncRule | None] | None) -> AsyncRule:
    """Combine async rules into one that is valid only if all are valid."""
    present = [rule for rule in rules or () if rule is not None]
    if not present:
        return _always_valid

    async def _composed(value: Any) -> Outcome:
        outcomes = await asyncio.gather(*(rule(value) for rule in present))
        return merge_outcomes(outcomes)

    return _composed
