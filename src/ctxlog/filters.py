"""
ContextFilter: black-list / white-list gating of tagged messages.

Two independent context sets and one active mode:

    BLACKLIST  pass everything except blacklisted contexts (opt-out)
    WHITELIST  pass only whitelisted contexts (opt-in, focused debugging)

Exactly one mode is active. Switching modes leaves both sets intact, so
a prepared white-list survives a round trip through black-list mode.
filter_to_single_context() is the exception: it always starts from an
empty white-list.

Messages without a context are never filtered.

The filter is also a formatter: ``format(level, message, context)``
returns the message unchanged or None, so it can be installed directly
on a sink.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Hashable, Optional


class FilterMode(Enum):
    BLACKLIST = 'blacklist'
    WHITELIST = 'whitelist'


class FilterDecision(Enum):
    PASS = 'pass'
    DROP = 'drop'


@dataclass(frozen=True)
class FilterState:
    """Immutable view of a ContextFilter at one instant."""
    mode: FilterMode
    blacklist: FrozenSet[Hashable]
    whitelist: FrozenSet[Hashable]


class ContextFilter:
    """Runtime-mutable context filter, safe to share between threads.

    Usage::

        flt = ContextFilter()
        flt.add_to_blacklist(NETWORKING)
        flt.decide(NETWORKING)      # FilterDecision.DROP
        flt.filter_to_single_context(AUTH)
        flt.decide(AUTH)            # FilterDecision.PASS
        flt.reset()
    """

    def __init__(self, mode: FilterMode = FilterMode.BLACKLIST):
        self._lock = threading.Lock()
        self._mode = mode
        self._blacklist = set()
        self._whitelist = set()

    # -- mode -----------------------------------------------------------------

    @property
    def mode(self) -> FilterMode:
        with self._lock:
            return self._mode

    def activate_blacklist(self) -> None:
        with self._lock:
            self._mode = FilterMode.BLACKLIST

    def activate_whitelist(self) -> None:
        with self._lock:
            self._mode = FilterMode.WHITELIST

    # -- black-list -----------------------------------------------------------

    def add_to_blacklist(self, context: Hashable) -> None:
        with self._lock:
            self._blacklist.add(context)

    def remove_from_blacklist(self, context: Hashable) -> None:
        with self._lock:
            self._blacklist.discard(context)

    def is_blacklisted(self, context: Hashable) -> bool:
        with self._lock:
            return context in self._blacklist

    def blacklisted_contexts(self) -> FrozenSet[Hashable]:
        with self._lock:
            return frozenset(self._blacklist)

    # -- white-list -----------------------------------------------------------

    def add_to_whitelist(self, context: Hashable) -> None:
        with self._lock:
            self._whitelist.add(context)

    def remove_from_whitelist(self, context: Hashable) -> None:
        with self._lock:
            self._whitelist.discard(context)

    def is_whitelisted(self, context: Hashable) -> bool:
        with self._lock:
            return context in self._whitelist

    def whitelisted_contexts(self) -> FrozenSet[Hashable]:
        with self._lock:
            return frozenset(self._whitelist)

    # -- bulk operations ------------------------------------------------------

    def filter_to_single_context(self, context: Hashable) -> None:
        """Show only ``context``: white-list mode, white-list = {context}.

        The previous white-list contents are discarded. The black-list is
        left untouched.
        """
        with self._lock:
            self._mode = FilterMode.WHITELIST
            self._whitelist.clear()
            self._whitelist.add(context)

    def reset(self) -> None:
        """Clear both lists and return to (empty) black-list mode."""
        with self._lock:
            self._whitelist.clear()
            self._blacklist.clear()
            self._mode = FilterMode.BLACKLIST

    def snapshot(self) -> FilterState:
        with self._lock:
            return FilterState(
                mode=self._mode,
                blacklist=frozenset(self._blacklist),
                whitelist=frozenset(self._whitelist),
            )

    # -- decision -------------------------------------------------------------

    def decide(self, context: Optional[Hashable]) -> FilterDecision:
        """Decide whether a message tagged ``context`` passes.

        Untagged messages (context None) always pass.
        """
        if context is None:
            return FilterDecision.PASS
        with self._lock:
            if self._mode is FilterMode.WHITELIST:
                allowed = context in self._whitelist
            else:
                allowed = context not in self._blacklist
        return FilterDecision.PASS if allowed else FilterDecision.DROP

    def allows(self, context: Optional[Hashable]) -> bool:
        return self.decide(context) is FilterDecision.PASS

    def format(self, level, message: str,
               context: Optional[Hashable] = None) -> Optional[str]:
        """Formatter hook: the message itself, or None when filtered out."""
        return message if self.allows(context) else None
