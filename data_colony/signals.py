"""SignalBus - synchronous notifications from the colony to its observers."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Callable

logger = logging.getLogger(__name__)

SignalHandler = Callable[[str, dict[str, Any]], None]
HandlerErrorHook = Callable[[str, SignalHandler, Exception], None]


class SignalBus:
    """Delivers each published signal to its subscribers right away.

    A handler that raises is logged, counted and passed to ``on_error``.
    The other handlers still receive the signal and the publisher never
    sees the exception, so a broken observer cannot undo a command that
    has already changed the colony.

    When ``signals`` is given, only those names may be subscribed to or
    published; anything else raises ValueError.
    """

    def __init__(
        self,
        signals: Iterable[str] | None = None,
        on_error: HandlerErrorHook | None = None,
    ) -> None:
        self._known = frozenset(signals) if signals is not None else None
        self._on_error = on_error
        self._subscribers: dict[str, list[SignalHandler]] = {}
        self._error_count = 0

    @property
    def signals(self) -> frozenset[str] | None:
        return self._known

    @property
    def error_count(self) -> int:
        return self._error_count

    def subscribe(self, signal_name: str, handler: SignalHandler) -> None:
        self._check(signal_name)
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: SignalHandler) -> None:
        handlers = self._subscribers.get(signal_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, signal_name: str) -> int:
        return len(self._subscribers.get(signal_name, []))

    def publish(self, signal_name: str, **data: Any) -> int:
        """Call every handler of ``signal_name``. Returns how many succeeded."""
        self._check(signal_name)
        delivered = 0
        for handler in list(self._subscribers.get(signal_name, [])):
            try:
                handler(signal_name, data)
            except Exception as exc:
                self._error_count += 1
                logger.exception("Error in %r handler %r", signal_name, handler)
                if self._on_error is not None:
                    self._on_error(signal_name, handler, exc)
            else:
                delivered += 1
        return delivered

    def clear(self) -> None:
        """Drop every subscription."""
        self._subscribers.clear()

    def _check(self, signal_name: str) -> None:
        if self._known is not None and signal_name not in self._known:
            raise ValueError(f"unknown signal {signal_name!r}; expected one of {sorted(self._known)}")
