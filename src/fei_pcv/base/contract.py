"""Base class and call decorators for simulated contracts."""

import functools
from typing import Any, Callable, TypeVar

from ..types import ReentrantCall
from .chain import Chain, Event

F = TypeVar("F", bound=Callable[..., Any])


class Contract:
    """
    A contract deployed on a Chain.

    All instance attributes are contract storage: they are snapshotted and
    restored by `Chain.transaction()`, so subclasses must keep only plain
    data and references to other contracts on `self`.
    """

    def __init__(self, chain: Chain, label: str):
        self.chain = chain
        self.label = label
        self._entered = False
        self.address = chain.register(self, label)

    def emit(self, name: str, **args: Any) -> Event:
        return self.chain.emit(self, name, **args)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.label} {self.address}>"


def transactional(func: F) -> F:
    """Commit the call's state changes only if it returns normally."""

    @functools.wraps(func)
    def wrapper(self: Contract, *args: Any, **kwargs: Any) -> Any:
        with self.chain.transaction():
            return func(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def nonreentrant(func: F) -> F:
    """
    Reject nested entry into any nonreentrant method of the same contract.

    The busy flag is cleared on exit whether the call returns or raises.
    """

    @functools.wraps(func)
    def wrapper(self: Contract, *args: Any, **kwargs: Any) -> Any:
        if self._entered:
            raise ReentrantCall(f"{self.__class__.__name__}: reentrant call")
        self._entered = True
        try:
            return func(self, *args, **kwargs)
        finally:
            self._entered = False

    return wrapper  # type: ignore[return-value]
