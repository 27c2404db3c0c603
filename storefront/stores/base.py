# storefront/stores/base.py
from __future__ import annotations
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")

# listener(action, items_snapshot)
StoreListener = Callable[[str, List[Any]], None]

LOAD = "load"


class ItemStore(Generic[T]):
    """
    Base for the cart and wishlist stores.

    State is an ordered list of items with unique ids. Subclasses compute the
    next list with pure functions and hand it to `_commit`, which swaps the list
    in and notifies every subscriber with the action name and a snapshot.
    Listener errors (e.g. a failed durable write) propagate to the caller.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None):
        self._items: List[T] = self._unique([self._coerce(it) for it in (items or [])])
        self._listeners: List[StoreListener] = []

    def _coerce(self, item: Any) -> T:
        raise NotImplementedError

    def _merge(self, existing: T, duplicate: T) -> T:
        """Fold a repeated id into the first-seen entry. The first one wins by default."""
        return existing

    def _unique(self, items: List[T]) -> List[T]:
        out: List[T] = []
        for it in items:
            for idx, seen in enumerate(out):
                if seen.id == it.id:
                    out[idx] = self._merge(seen, it)
                    break
            else:
                out.append(it)
        return out

    @property
    def items(self) -> List[T]:
        return list(self._items)

    def get(self, item_id: Any) -> Optional[T]:
        for it in self._items:
            if it.id == item_id:
                return it
        return None

    def __contains__(self, item_id: Any) -> bool:
        return self.get(item_id) is not None

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, action: str) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(action, snapshot)

    def _commit(self, action: str, items: List[T]) -> None:
        self._items = items
        self._notify(action)

    def load(self, items: Iterable[Any]) -> None:
        """Replace the whole list, e.g. after switching storage partition."""
        self._commit(LOAD, self._unique([self._coerce(it) for it in (items or [])]))
