"""Change subscribers and root-coalescing notification.

Subscribers form an explicit tree: each one may name a ``parent`` when it is
created. Re-rendering an ancestor already re-renders its descendants, so a
broadcast only reaches the outermost registered subscriber of each branch.
A subscriber with ``force=True`` (or every subscriber, when the registry is
asked to force) is always notified itself.

Thread Safety:
    Not thread-safe. A registry belongs to one LanguageHelper and is driven
    from its event loop.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .codes import LanguageCode

__all__ = [
    "Subscriber",
    "SubscriberRegistry",
]

logger = logging.getLogger(__name__)


class Subscriber:
    """A view (or anything else) that re-renders when the language changes.

    Either pass a ``callback`` or subclass and override update_language().

    Args:
        callback: Called with the new LanguageCode when notified
        parent: Enclosing subscriber, fixed for the subscriber's lifetime
        force: Always notify this subscriber, even when an ancestor is
            registered. None defers to the helper's ``force_rebuild``.

    Example:
        >>> page = Subscriber(lambda code: print("page", code))
        >>> label = Subscriber(lambda code: print("label", code), parent=page)
        >>> helper.register(page)
        >>> helper.register(label)
        >>> await helper.change("vi")   # prints only "page vi"
    """

    __slots__ = ("__weakref__", "_callback", "force", "name", "parent")

    def __init__(
        self,
        callback: Callable[[LanguageCode], object] | None = None,
        *,
        parent: Subscriber | None = None,
        force: bool | None = None,
        name: str | None = None,
    ) -> None:
        self._callback = callback
        self.parent = parent
        self.force = force
        self.name = name

    def __repr__(self) -> str:
        label = self.name or hex(id(self))
        return f"Subscriber({label})"

    def update_language(self, code: LanguageCode) -> None:
        """Re-render for ``code``."""
        if self._callback is not None:
            self._callback(code)

    def ancestors(self) -> Iterator[Subscriber]:
        """Parents from the nearest outwards."""
        node = self.parent
        seen: set[int] = {id(self)}
        while node is not None and id(node) not in seen:
            seen.add(id(node))
            yield node
            node = node.parent


class SubscriberRegistry:
    """Registered subscribers of one LanguageHelper, in registration order."""

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: dict[Subscriber, None] = {}

    def __len__(self) -> int:
        return len(self._subscribers)

    def __iter__(self) -> Iterator[Subscriber]:
        return iter(tuple(self._subscribers))

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers

    def register(self, subscriber: Subscriber) -> bool:
        """Add ``subscriber``; registering twice is a no-op returning False."""
        if subscriber in self._subscribers:
            return False
        self._subscribers[subscriber] = None
        logger.debug("Registered %r (%d total)", subscriber, len(self._subscribers))
        return True

    def deregister(self, subscriber: Subscriber) -> bool:
        """Remove ``subscriber``; returns False if it was not registered.

        Registered descendants are then coalesced into their next registered
        ancestor, or become roots themselves.
        """
        if subscriber not in self._subscribers:
            return False
        del self._subscribers[subscriber]
        logger.debug("Deregistered %r (%d left)", subscriber, len(self._subscribers))
        return True

    def clear(self) -> None:
        self._subscribers.clear()

    def root_of(self, subscriber: Subscriber) -> Subscriber:
        """Outermost registered ancestor of ``subscriber``, or itself."""
        root = subscriber
        for ancestor in subscriber.ancestors():
            if ancestor in self._subscribers:
                root = ancestor
        return root

    def is_root(self, subscriber: Subscriber) -> bool:
        """True if no ancestor of ``subscriber`` is registered."""
        return self.root_of(subscriber) is subscriber

    def targets(self, *, force_rebuild: bool = False) -> tuple[Subscriber, ...]:
        """Subscribers a broadcast would notify, de-duplicated, in order."""
        result: dict[Subscriber, None] = {}
        for subscriber in self._subscribers:
            forced = force_rebuild if subscriber.force is None else subscriber.force
            target = subscriber if forced else self.root_of(subscriber)
            result.setdefault(target, None)
        return tuple(result)

    def notify(self, code: LanguageCode, *, force_rebuild: bool = False) -> tuple[Subscriber, ...]:
        """Call update_language() on every target; return the targets."""
        targets = self.targets(force_rebuild=force_rebuild)
        logger.debug(
            "Notifying %d of %d subscribers of %s", len(targets), len(self._subscribers), code
        )
        for subscriber in targets:
            subscriber.update_language(code)
        return targets
