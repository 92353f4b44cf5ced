"""Cancellable handle returned by every subscribe call."""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Subscription:
    """Releases a listener registration exactly once.

    Calling :meth:`unsubscribe` more than once is harmless. Also usable as a
    context manager so the registration is scoped to a ``with`` block.
    """

    def __init__(self, release: Callable[[], None], name: str = "") -> None:
        self._release: Optional[Callable[[], None]] = release
        self._name = name

    @property
    def active(self) -> bool:
        return self._release is not None

    def unsubscribe(self) -> None:
        release, self._release = self._release, None
        if release is None:
            return
        release()
        logger.debug("Subscription released: %s", self._name or hex(id(self)))

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()
