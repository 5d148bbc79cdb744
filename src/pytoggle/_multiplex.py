"""Handler multiplexing for prop bags."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


def call_all(*handlers: Callable[..., Any] | None) -> Callable[..., None]:
    """Compose *handlers* into one callable.

    Every non-``None`` handler is invoked in the given order with identical
    arguments. Return values are discarded.
    """
    present = tuple(handler for handler in handlers if handler is not None)

    def _multiplexed(*args: Any, **kwargs: Any) -> None:
        for handler in present:
            handler(*args, **kwargs)

    return _multiplexed
