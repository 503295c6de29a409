"""Ordered fallback chains.

Selector lists and multi-strategy matching are written as a list of named
strategies. The first one returning a truthy value wins and the result is
tagged with the strategy name, so callers can log which fallback fired and
tests can check each strategy on its own.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

log = logging.getLogger("strategies")

T = TypeVar("T")


@dataclass(frozen=True)
class Strategy(Generic[T]):
    name: str
    func: Callable[..., Any]


@dataclass(frozen=True)
class StrategyResult(Generic[T]):
    name: str
    value: T


def first_success(strategies: Iterable[Strategy], *args, **kwargs) -> Optional[StrategyResult]:
    for strategy in strategies:
        value = strategy.func(*args, **kwargs)
        if value:
            return StrategyResult(strategy.name, value)
        log.debug("strategy %s found nothing", strategy.name)
    return None


async def afirst_success(strategies: Iterable[Strategy], *args, **kwargs) -> Optional[StrategyResult]:
    """Async variant of :func:`first_success`; each ``func`` returns an awaitable."""
    for strategy in strategies:
        value = await strategy.func(*args, **kwargs)
        if value:
            return StrategyResult(strategy.name, value)
        log.debug("strategy %s found nothing", strategy.name)
    return None
