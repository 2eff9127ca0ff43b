"""Parse tree nodes produced for parser rules."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import islice
from typing import Any, Optional, TypeVar

INVALID_INVOKING_STATE = -1
INVALID_TOKEN_INDEX = -1

_C = TypeVar("_C")


def _nth(items: Iterator[_C], pos: int) -> Optional[_C]:
    if pos < 0:
        return None
    return next(islice(items, pos, None), None)


def _token_index(token: Any) -> int:
    if token is None:
        return INVALID_TOKEN_INDEX
    return token.token_index


class ParserRuleContext:
    """A node in the parse tree that records one invocation of a parser rule.

    Children are either other rule contexts or terminal nodes. A terminal
    node is any object with a ``symbol`` attribute holding a token that has
    a ``token_type``; tokens used as start and stop need a ``token_index``.
    """

    def __init__(
        self,
        parent: Optional[ParserRuleContext] = None,
        invoking_state: int = INVALID_INVOKING_STATE,
        rule_index: int = 0,
    ) -> None:
        self.parent = parent
        self.invoking_state = invoking_state
        self.rule_index = rule_index
        self.alt_number = 0
        self.start: Any = None
        self.stop: Any = None
        self.exception: Optional[BaseException] = None
        self.children: list[Any] = []

    @classmethod
    def copy_from(cls, ctx: ParserRuleContext, rule_index: Optional[int] = None) -> ParserRuleContext:
        """Build a new context that takes over the position, tokens and children of ``ctx``."""
        copy = cls(
            ctx.parent,
            ctx.invoking_state,
            ctx.rule_index if rule_index is None else rule_index,
        )
        copy.start = ctx.start
        copy.stop = ctx.stop
        copy.children = list(ctx.children)
        return copy

    def is_empty(self) -> bool:
        """True when this context was not invoked from any ATN state."""
        return self.invoking_state == INVALID_INVOKING_STATE

    def has_parent(self) -> bool:
        return self.parent is not None

    def set_start(self, token: Any) -> None:
        """Set the first token of this rule; ``None`` means an invalid token."""
        self.start = token

    def set_stop(self, token: Any) -> None:
        """Set the last token of this rule; ``None`` means an invalid token."""
        self.stop = token

    def add_child(self, child: Any) -> None:
        self.children.append(child)

    def remove_last_child(self) -> None:
        """Drop the most recently added child, if there is one."""
        if self.children:
            self.children.pop()

    def get_child(self, index: int) -> Any:
        """Return the child at ``index``, or ``None`` when there is none."""
        if 0 <= index < len(self.children):
            return self.children[index]
        return None

    def get_child_count(self) -> int:
        return len(self.children)

    def child_of_type(self, cls: type[_C], pos: int = 0) -> Optional[_C]:
        """Return the ``pos``-th child whose type is exactly ``cls``."""
        return _nth((c for c in self.children if type(c) is cls), pos)

    def children_of_type(self, cls: type[_C]) -> list[_C]:
        """Return every child whose type is exactly ``cls``, in order."""
        return [c for c in self.children if type(c) is cls]

    def _terminals(self, ttype: int) -> Iterator[Any]:
        for child in self.children:
            symbol = getattr(child, "symbol", None)
            if symbol is not None and symbol.token_type == ttype:
                yield child

    def get_token(self, ttype: int, pos: int = 0) -> Any:
        """Return the ``pos``-th terminal child carrying a token of type ``ttype``."""
        return _nth(self._terminals(ttype), pos)

    def get_tokens(self, ttype: int) -> list[Any]:
        """Return every terminal child carrying a token of type ``ttype``."""
        return list(self._terminals(ttype))

    def get_text(self) -> str:
        """Concatenate the text of all children."""
        return "".join(child.get_text() for child in self.children)

    def get_source_interval(self) -> tuple[int, int]:
        """Return the inclusive token-index range from start to stop."""
        return _token_index(self.start), _token_index(self.stop)

    def to_string(
        self,
        rule_names: Optional[Sequence[str]] = None,
        stop: Optional[ParserRuleContext] = None,
    ) -> str:
        """Describe the chain of rule invocations from this node up to ``stop`` or the root."""
        parts: list[str] = []
        node: Optional[ParserRuleContext] = self
        while node is not None:
            if stop is not None and node is stop:
                break
            if rule_names is not None:
                index = node.rule_index
                parts.append(rule_names[index] if 0 <= index < len(rule_names) else str(index))
            elif not node.is_empty():
                parts.append(str(node.invoking_state))
            node = node.parent
        return "[" + " ".join(parts) + "]"

    def accept_children(self, visitor: Any) -> None:
        """Let ``visitor`` visit each child in order through the child's ``accept``."""
        for child in self.children:
            child.accept(visitor)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule_index={self.rule_index}, invoking_state={self.invoking_state})"