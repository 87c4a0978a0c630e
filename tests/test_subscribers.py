"""Tests for Subscriber and root-coalescing notification.

Python 3.13+.
"""

import pytest

from langhelper import LanguageCode, Subscriber, SubscriberRegistry
from tests.helpers.sources import VI


class Recorder(Subscriber):
    """Subscriber that records the codes it was notified with."""

    __slots__ = ("seen",)

    def __init__(self, name: str, *, parent: Subscriber | None = None, force: bool | None = None):
        super().__init__(parent=parent, force=force, name=name)
        self.seen: list[LanguageCode] = []

    def update_language(self, code: LanguageCode) -> None:
        self.seen.append(code)


@pytest.fixture
def registry() -> SubscriberRegistry:
    return SubscriberRegistry()


class TestSubscriber:
    def test_callback_invoked(self) -> None:
        seen: list[LanguageCode] = []
        Subscriber(seen.append).update_language(VI)
        assert seen == [VI]

    def test_no_callback_is_noop(self) -> None:
        Subscriber().update_language(VI)

    def test_ancestors_nearest_first(self) -> None:
        root = Subscriber(name="root")
        mid = Subscriber(parent=root, name="mid")
        leaf = Subscriber(parent=mid, name="leaf")
        assert list(leaf.ancestors()) == [mid, root]

    def test_ancestors_cycle_safe(self) -> None:
        a = Subscriber(name="a")
        b = Subscriber(parent=a, name="b")
        a.parent = b
        assert list(b.ancestors()) == [a]

    def test_repr_uses_name(self) -> None:
        assert repr(Subscriber(name="page")) == "Subscriber(page)"


class TestRegistry:
    def test_register_once(self, registry: SubscriberRegistry) -> None:
        page = Subscriber()
        assert registry.register(page) is True
        assert registry.register(page) is False
        assert len(registry) == 1
        assert page in registry

    def test_deregister(self, registry: SubscriberRegistry) -> None:
        page = Subscriber()
        registry.register(page)
        assert registry.deregister(page) is True
        assert registry.deregister(page) is False
        assert page not in registry

    def test_iteration_in_registration_order(self, registry: SubscriberRegistry) -> None:
        subscribers = [Subscriber(name=str(i)) for i in range(3)]
        for subscriber in reversed(subscribers):
            registry.register(subscriber)
        assert list(registry) == subscribers[::-1]

    def test_clear(self, registry: SubscriberRegistry) -> None:
        registry.register(Subscriber())
        registry.clear()
        assert len(registry) == 0


class TestCoalescing:
    """Only the outermost registered subscriber of each branch is notified."""

    def test_child_coalesced_into_parent(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        label = Recorder("label", parent=page)
        registry.register(page)
        registry.register(label)
        assert registry.notify(VI) == (page,)
        assert page.seen == [VI]
        assert label.seen == []

    def test_unregistered_middle_skipped(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        section = Recorder("section", parent=page)
        label = Recorder("label", parent=section)
        registry.register(label)
        registry.register(page)
        assert registry.root_of(label) is page
        assert registry.targets() == (page,)

    def test_unregistered_parent_makes_root(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        label = Recorder("label", parent=page)
        registry.register(label)
        assert registry.is_root(label)
        assert registry.targets() == (label,)

    def test_deregistering_parent_promotes_child(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        label = Recorder("label", parent=page)
        registry.register(page)
        registry.register(label)
        registry.deregister(page)
        assert registry.notify(VI) == (label,)
        assert label.seen == [VI]

    def test_siblings_notified_once_through_root(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        registry.register(Recorder("a", parent=page))
        registry.register(Recorder("b", parent=page))
        registry.register(page)
        registry.notify(VI)
        assert page.seen == [VI]

    def test_separate_trees(self, registry: SubscriberRegistry) -> None:
        first, second = Recorder("first"), Recorder("second")
        registry.register(first)
        registry.register(second)
        assert registry.targets() == (first, second)


class TestForce:
    """force bypasses coalescing for one subscriber or all of them."""

    def test_force_rebuild_notifies_everyone(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        label = Recorder("label", parent=page)
        registry.register(page)
        registry.register(label)
        assert registry.notify(VI, force_rebuild=True) == (page, label)
        assert label.seen == [VI]

    def test_per_subscriber_force(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        label = Recorder("label", parent=page, force=True)
        registry.register(page)
        registry.register(label)
        assert registry.targets() == (page, label)

    def test_per_subscriber_opt_out(self, registry: SubscriberRegistry) -> None:
        page = Recorder("page")
        label = Recorder("label", parent=page, force=False)
        registry.register(page)
        registry.register(label)
        assert registry.targets(force_rebuild=True) == (page,)
