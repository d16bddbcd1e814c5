"""
BNumber Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import Any, Callable, Generic, TypeVar

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")


class BiDirectionalMap(Mapping[K, V], Generic[K, V]):
    """
    A bidirectional map with Mapping-compatible API on the forward direction.

    - Forward direction (key -> value) implements the stdlib Mapping protocol:
      __getitem__, __iter__, __len__, keys(), values(), items(), get().
      Membership (x in bimap) applies to KEYS only, like dict.
    - Reverse direction (value -> key) available via get_key(value) and has_value(value).
      Reverse lookups go through value_fold, e.g. str.upper for case-insensitive values.
    - Insertion is additive-only: the first entry for a key wins, as does the first
      entry for a value. Later duplicates are ignored in that direction.
    """

    def __init__(self,
                 initial: Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
                 *,
                 value_fold: Callable[[V], Any] | None = None) -> None:
        self._forward_map: dict[K, V] = {}
        self._backward_map: dict[Any, K] = {}
        self._value_fold = value_fold
        if initial:
            self.update(initial)

    # ----- Mapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._forward_map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    # ----- Mapping helpers (typed views) -----

    def keys(self) -> KeysView[K]:
        return self._forward_map.keys()

    def values(self) -> ValuesView[V]:
        return self._forward_map.values()

    def items(self) -> ItemsView[K, V]:
        return self._forward_map.items()

    def get(self, key: K, default: V | None = None) -> V | None:
        return self._forward_map.get(key, default)

    # ----- Bidirectional operations -----

    def get_key(self, value: V, default: K | None = None) -> K | None:
        """Lookup key by value, returns default if the value is absent."""
        return self._backward_map.get(self._fold(value), default)

    def has_value(self, value: V) -> bool:
        """True if value exists in reverse map."""
        return self._fold(value) in self._backward_map

    # ----- Mutations -----

    def add(self, key: K, value: V) -> bool:
        """
        Add a key-value pair, each direction keeps its first entry.

        Returns:
            True if the pair was stored in at least one direction.
        """
        added = False
        if key not in self._forward_map:
            self._forward_map[key] = value
            added = True

        folded = self._fold(value)
        if folded not in self._backward_map:
            self._backward_map[folded] = key
            added = True

        return added

    def update(self, other: Mapping[K, V] | Iterable[tuple[K, V]]) -> None:
        """Bulk add with the same first-wins semantics as add()."""
        iterable = other.items() if isinstance(other, Mapping) else other
        for k, v in iterable:
            self.add(k, v)

    # ----- Equality and representation -----

    def __repr__(self) -> str:
        return f"BiDirectionalMap({self._forward_map!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return dict(self._forward_map.items()) == dict(other.items())
        return NotImplemented

    def _fold(self, value: Any) -> Any:
        if self._value_fold is None:
            return value
        try:
            return self._value_fold(value)
        except (TypeError, AttributeError):
            return value
