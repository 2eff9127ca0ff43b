# allpredict

Building blocks for adaptive LL(*) parsing: graph-structured prediction
contexts (the rule-invocation stacks tracked during prediction), the
32-bit MurmurHash3 used to hash them, and parse-tree rule contexts.

## Installation

```
pip install allpredict
```

For running the tests:

```
pip install "allpredict[test]"
pytest
```

## Prediction contexts

A prediction context is a stack of return states shared as a graph
(`allpredict.prediction_context`).

- `SingletonPredictionContext(parent, return_state)` holds one return
  state and its parent.
- `ArrayPredictionContext(parents, return_states)` holds several pairs;
  the two sequences must have the same length (otherwise `ValueError`).
- `empty_context()` returns the shared empty stack, printed as `$`.

Every context supports `len()`, `get_parent(i)`, `get_return_state(i)`,
`is_empty()`, `has_empty_path()` and `hash_code()`. Contexts are
immutable, compare by value and can be used as dictionary keys.

```python
from allpredict.prediction_context import (
    SingletonPredictionContext,
    empty_context,
    merge,
)

root = empty_context()
a = SingletonPredictionContext(root, 5)
b = SingletonPredictionContext(root, 9)

merged = merge(a, b, False, {})
print(merged)                    # [5 $, 9 $]
print(len(merged))               # 2
print(merged.has_empty_path())   # False
```

`merge(a, b, root_is_wildcard, merge_cache)` combines two contexts into
one that represents both stacks; merged entries are kept sorted by
return state. With `root_is_wildcard` true the empty context absorbs any
other; otherwise the empty path is kept as its own entry. Pass a
dictionary as `merge_cache` to reuse the results of earlier merges, or
`None` to disable caching. The lower-level steps are available as
`merge_singletons`, `merge_root` and `merge_arrays`.

`PredictionContextCache` hands out one shared instance per distinct
context and is safe to use from several threads:

```python
from allpredict.prediction_context import PredictionContextCache

cache = PredictionContextCache()
shared = cache.get_shared_context(merged, {})
print(shared is cache.get_shared_context(merged, {}))  # True
print(len(cache))                                       # 1
```

The empty context is returned as is and never stored.

## Hashing

`allpredict.murmur` provides `MurmurHasher`, a streaming 32-bit
MurmurHash3 (`write(bytes)`, `write_i32(value)`, `finish()`), and
`hash_i32s(values, seed)` to hash a sequence of 32-bit integers at once.
Prediction contexts hash their parents' hash codes followed by their
return states this way, so equal contexts always hash equally.

## Rule contexts

`ParserRuleContext` (`allpredict.parser_rule_context`) is a node of a
parse tree: it knows its parent, the ATN state that invoked it, its rule
index, its start and stop tokens and its children.

```python
from allpredict.parser_rule_context import ParserRuleContext

top = ParserRuleContext(None, -1, 0)
child = ParserRuleContext(top, 4, 1)
top.add_child(child)

print(child.to_string(["file", "row"], None))   # [row file]
print(child.to_string(None, None))              # [4]
print(top.get_child_count())                    # 1
```

- `child_of_type(cls, pos)` and `children_of_type(cls)` find children
  whose type is exactly `cls`.
- `get_token(ttype, pos)` and `get_tokens(ttype)` find terminal children:
  any child with a `symbol` attribute whose `token_type` equals `ttype`.
- `get_source_interval()` returns the `token_index` of the start and stop
  tokens, with `-1` for a token that is not set.
- `get_text()` joins the `get_text()` of all children, and
  `accept_children(visitor)` calls `child.accept(visitor)` on each child.
- `copy_from(ctx, rule_index)` builds a new context that takes over the
  parent, invoking state, tokens and children of `ctx`.

## What this package does not do

It holds the data structures only. There is no lexer, no parser, no
token stream, no ATN or ATN simulation and no grammar tooling here;
tokens, terminal nodes and visitors are whatever objects the caller
supplies with the attributes described above.