"""Graph-structured rule invocation stacks used during adaptive prediction."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Optional

from .murmur import hash_i32s

EMPTY_RETURN_STATE = 0x7FFFFFFF

MergeCache = dict


def _signed32(value: int) -> int:
    return value - 0x100000000 if value >= 0x80000000 else value


def _compute_hash(parents: Sequence[Optional["PredictionContext"]], return_states: Sequence[int]) -> int:
    values = [0 if p is None else p.hash_code() for p in parents]
    values.extend(return_states)
    return _signed32(hash_i32s(values))


class PredictionContext:
    """A node of the invocation stack graph: parents paired with return states."""

    __slots__ = ("_parents", "_return_states", "_hash")

    def _setup(self, parents: Sequence[Optional[PredictionContext]], return_states: Sequence[int]) -> None:
        self._parents = tuple(parents)
        self._return_states = tuple(return_states)
        self._hash = _compute_hash(self._parents, self._return_states)

    @property
    def parents(self) -> tuple[Optional[PredictionContext], ...]:
        return self._parents

    @property
    def return_states(self) -> tuple[int, ...]:
        return self._return_states

    def get_parent(self, index: int) -> Optional[PredictionContext]:
        return self._parents[index]

    def get_return_state(self, index: int) -> int:
        return self._return_states[index]

    def __len__(self) -> int:
        return len(self._return_states)

    def is_empty(self) -> bool:
        return self._return_states[0] == EMPTY_RETURN_STATE

    def has_empty_path(self) -> bool:
        return self._return_states[-1] == EMPTY_RETURN_STATE

    def hash_code(self) -> int:
        return self._hash

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented if not isinstance(other, PredictionContext) else False
        return (
            self._hash == other._hash
            and self._return_states == other._return_states
            and self._parents == other._parents
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class SingletonPredictionContext(PredictionContext):
    """A context with exactly one parent and one return state."""

    __slots__ = ()

    def __init__(self, parent: Optional[PredictionContext], return_state: int) -> None:
        self._setup((parent,), (return_state,))

    @property
    def parent(self) -> Optional[PredictionContext]:
        return self._parents[0]

    @property
    def return_state(self) -> int:
        return self._return_states[0]

    def get_parent(self, index: int) -> Optional[PredictionContext]:
        return self._parents[0]

    def get_return_state(self, index: int) -> int:
        return self._return_states[0]

    def is_empty(self) -> bool:
        return self.return_state == EMPTY_RETURN_STATE and self.parent is None

    def __str__(self) -> str:
        if self.return_state == EMPTY_RETURN_STATE:
            return "$"
        if self.parent is not None:
            return f"{self.return_state} {self.parent}"
        return str(self.return_state)


class ArrayPredictionContext(PredictionContext):
    """A context merging several parent/return-state pairs, sorted by return state."""

    __slots__ = ()

    def __init__(
        self,
        parents: Sequence[Optional[PredictionContext]],
        return_states: Sequence[int],
    ) -> None:
        if len(parents) != len(return_states):
            raise ValueError("parents and return_states must have the same length")
        self._setup(parents, return_states)

    def __str__(self) -> str:
        items = []
        for state, parent in zip(self._return_states, self._parents):
            text = ("$" if state == EMPTY_RETURN_STATE else "") + str(state)
            text += " null" if parent is None else f" {parent}"
            items.append(text)
        return "[" + ", ".join(items) + "]"


_EMPTY = SingletonPredictionContext(None, EMPTY_RETURN_STATE)


def empty_context() -> SingletonPredictionContext:
    """Return the shared empty context."""
    return _EMPTY


def _as_array(ctx: PredictionContext) -> ArrayPredictionContext:
    if isinstance(ctx, ArrayPredictionContext):
        return ctx
    return ArrayPredictionContext(ctx.parents, ctx.return_states)


def merge(
    a: PredictionContext,
    b: PredictionContext,
    root_is_wildcard: bool = False,
    merge_cache: Optional[dict] = None,
) -> PredictionContext:
    """Merge two contexts into one that represents both stacks."""
    if a is b or a == b:
        return a

    if merge_cache is not None:
        cached = merge_cache.get((a, b))
        if cached is None:
            cached = merge_cache.get((b, a))
        if cached is not None:
            return cached

    if isinstance(a, SingletonPredictionContext) and isinstance(b, SingletonPredictionContext):
        result = merge_singletons(a, b, root_is_wildcard, merge_cache)
    else:
        if root_is_wildcard and (a.is_empty() or b.is_empty()):
            return _EMPTY
        merged = merge_arrays(a, b, root_is_wildcard, merge_cache)
        if merged == a:
            result = a
        elif merged == b:
            result = b
        else:
            result = merged

    if merge_cache is not None:
        merge_cache[(a, b)] = result
    return result


def merge_singletons(
    a: SingletonPredictionContext,
    b: SingletonPredictionContext,
    root_is_wildcard: bool = False,
    merge_cache: Optional[dict] = None,
) -> PredictionContext:
    """Merge two singleton contexts."""
    root = merge_root(a, b, root_is_wildcard)
    if root is not None:
        return root

    if a.return_state == b.return_state:
        if a.parent is None or b.parent is None:
            raise ValueError("cannot merge singleton contexts without parents")
        parent = merge(a.parent, b.parent, root_is_wildcard, merge_cache)
        if parent is a.parent:
            return a
        if parent is b.parent:
            return b
        return SingletonPredictionContext(parent, a.return_state)

    pairs = sorted(
        [(a.return_state, a.parent), (b.return_state, b.parent)],
        key=lambda pair: pair[0],
    )
    return ArrayPredictionContext([p for _, p in pairs], [s for s, _ in pairs])


def merge_root(
    a: SingletonPredictionContext,
    b: SingletonPredictionContext,
    root_is_wildcard: bool = False,
) -> Optional[PredictionContext]:
    """Handle merges where either side is the empty context; None otherwise."""
    if root_is_wildcard:
        if a.is_empty() or b.is_empty():
            return _EMPTY
        return None
    if a.is_empty() and b.is_empty():
        return _EMPTY
    if a.is_empty():
        return ArrayPredictionContext([b.parent, None], [b.return_state, EMPTY_RETURN_STATE])
    if b.is_empty():
        return ArrayPredictionContext([a.parent, None], [a.return_state, EMPTY_RETURN_STATE])
    return None


def merge_arrays(
    a: PredictionContext,
    b: PredictionContext,
    root_is_wildcard: bool = False,
    merge_cache: Optional[dict] = None,
) -> ArrayPredictionContext:
    """Merge two contexts as sorted arrays of return states."""
    a = _as_array(a)
    b = _as_array(b)
    a_parents, a_states = a.parents, a.return_states
    b_parents, b_states = b.parents, b.return_states

    parents: list[Optional[PredictionContext]] = []
    states: list[int] = []
    i = j = 0
    while i < len(a_states) and j < len(b_states):
        a_parent, b_parent = a_parents[i], b_parents[j]
        if a_states[i] == b_states[j]:
            payload = a_states[i]
            both_empty = payload == EMPTY_RETURN_STATE and a_parent is None and b_parent is None
            same_parent = a_parent is not None and b_parent is not None and a_parent == b_parent
            if both_empty or same_parent:
                parents.append(a_parent)
            else:
                if a_parent is None or b_parent is None:
                    raise ValueError("cannot merge a context entry that has no parent")
                parents.append(merge(a_parent, b_parent, root_is_wildcard, merge_cache))
            states.append(payload)
            i += 1
            j += 1
        elif a_states[i] < b_states[j]:
            parents.append(a_parent)
            states.append(a_states[i])
            i += 1
        else:
            parents.append(b_parent)
            states.append(b_states[j])
            j += 1

    parents.extend(a_parents[i:])
    states.extend(a_states[i:])
    parents.extend(b_parents[j:])
    states.extend(b_states[j:])

    canonical: dict = {}
    parents = [canonical.setdefault(p, p) for p in parents]
    return ArrayPredictionContext(parents, states)


class PredictionContextCache:
    """Thread-safe store that hands out one shared instance per distinct context."""

    def __init__(self) -> None:
        self._cache: dict[PredictionContext, PredictionContext] = {}
        self._lock = threading.Lock()

    def get_shared_context(
        self,
        context: PredictionContext,
        visited: Optional[dict] = None,
    ) -> PredictionContext:
        """Return the cached instance equal to ``context``, caching it if new."""
        if visited is None:
            visited = {}
        if context.is_empty():
            return context
        seen = visited.get(id(context))
        if seen is not None:
            return seen
        with self._lock:
            shared = self._cache.setdefault(context, context)
        visited[id(context)] = shared
        return shared

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)