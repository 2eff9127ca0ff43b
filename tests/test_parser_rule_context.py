from dataclasses import dataclass

import pytest

from allpredict.parser_rule_context import ParserRuleContext


@dataclass
class Tok:
    token_type: int
    text: str
    token_index: int = 0


class Terminal:
    def __init__(self, token):
        self.symbol = token

    def get_text(self):
        return self.symbol.text

    def accept(self, visitor):
        visitor.append(("terminal", self.symbol.text))


class FieldContext(ParserRuleContext):
    def accept(self, visitor):
        visitor.append(("field", self.rule_index))


class RowContext(ParserRuleContext):
    def accept(self, visitor):
        visitor.append(("row", self.rule_index))


TEXT = 5
STRING = 6
RULE_NAMES = ["csvFile", "hdr", "row", "field"]


def test_root_is_empty_and_has_no_parent():
    root = ParserRuleContext()
    assert root.is_empty()
    assert not root.has_parent()
    assert root.get_child_count() == 0


def test_child_with_invoking_state_is_not_empty():
    root = ParserRuleContext()
    child = ParserRuleContext(root, 8, 1)
    assert not child.is_empty()
    assert child.has_parent()
    assert child.parent is root


def test_add_and_remove_children():
    ctx = ParserRuleContext()
    a, b = Terminal(Tok(TEXT, "a")), Terminal(Tok(TEXT, "b"))
    ctx.add_child(a)
    ctx.add_child(b)
    assert ctx.get_child_count() == 2
    assert ctx.get_child(1) is b
    ctx.remove_last_child()
    assert ctx.children == [a]
    ctx.remove_last_child()
    ctx.remove_last_child()
    assert ctx.get_child_count() == 0


def test_get_child_out_of_range():
    ctx = ParserRuleContext()
    ctx.add_child(Terminal(Tok(TEXT, "x")))
    assert ctx.get_child(1) is None
    assert ctx.get_child(-1) is None


def test_child_of_type_exact_type():
    row = ParserRuleContext(None, -1, 2)
    f1 = FieldContext(row, 16, 3)
    comma = Terminal(Tok(1, ","))
    f2 = FieldContext(row, 18, 3)
    for c in (f1, comma, f2):
        row.add_child(c)
    assert row.child_of_type(FieldContext, 0) is f1
    assert row.child_of_type(FieldContext, 1) is f2
    assert row.child_of_type(FieldContext, 2) is None
    assert row.child_of_type(RowContext, 0) is None
    assert row.children_of_type(FieldContext) == [f1, f2]
    assert row.children_of_type(ParserRuleContext) == []


def test_get_token_and_get_tokens():
    field = ParserRuleContext(None, -1, 3)
    t1 = Terminal(Tok(TEXT, "abc"))
    s1 = Terminal(Tok(STRING, '"q"'))
    t2 = Terminal(Tok(TEXT, "def"))
    for c in (t1, ParserRuleContext(field, 30, 3), s1, t2):
        field.add_child(c)
    assert field.get_token(TEXT, 0) is t1
    assert field.get_token(TEXT, 1) is t2
    assert field.get_token(STRING, 0) is s1
    assert field.get_token(STRING, 1) is None
    assert field.get_tokens(TEXT) == [t1, t2]
    assert field.get_tokens(99) == []


def test_get_text_concatenates_children():
    row = RowContext()
    field = FieldContext(row, 16, 3)
    field.add_child(Terminal(Tok(TEXT, "abc")))
    row.add_child(field)
    row.add_child(Terminal(Tok(1, ",")))
    row.add_child(Terminal(Tok(STRING, '"x"')))
    assert row.get_text() == 'abc,"x"'
    assert ParserRuleContext().get_text() == ""


def test_source_interval_from_start_and_stop():
    ctx = ParserRuleContext()
    assert ctx.get_source_interval() == (-1, -1)
    ctx.set_start(Tok(TEXT, "a", token_index=3))
    ctx.set_stop(Tok(TEXT, "b", token_index=7))
    assert ctx.get_source_interval() == (3, 7)
    ctx.set_stop(None)
    assert ctx.get_source_interval() == (3, -1)


def test_copy_from_shares_position_and_children():
    parent = ParserRuleContext()
    ctx = ParserRuleContext(parent, 4, 2)
    ctx.set_start(Tok(TEXT, "a", token_index=1))
    ctx.set_stop(Tok(TEXT, "b", token_index=2))
    child = Terminal(Tok(TEXT, "a"))
    ctx.add_child(child)
    copy = FieldContext.copy_from(ctx, 3)
    assert type(copy) is FieldContext
    assert copy.parent is parent
    assert copy.invoking_state == 4
    assert copy.rule_index == 3
    assert copy.start is ctx.start and copy.stop is ctx.stop
    assert copy.children == [child]
    copy.add_child(Terminal(Tok(TEXT, "z")))
    assert ctx.get_child_count() == 1


def test_copy_from_keeps_rule_index_by_default():
    ctx = ParserRuleContext(None, 2, 1)
    assert ParserRuleContext.copy_from(ctx).rule_index == 1


def test_to_string_with_rule_names():
    root = ParserRuleContext(None, -1, 0)
    hdr = ParserRuleContext(root, 8, 1)
    row = ParserRuleContext(hdr, 14, 2)
    assert row.to_string(RULE_NAMES) == "[row hdr csvFile]"
    assert row.to_string(RULE_NAMES, hdr) == "[row]"


def test_to_string_unknown_rule_index_uses_number():
    ctx = ParserRuleContext(None, -1, 9)
    assert ctx.to_string(RULE_NAMES) == "[9]"


def test_to_string_without_rule_names_uses_invoking_states():
    root = ParserRuleContext()
    hdr = ParserRuleContext(root, 8, 1)
    row = ParserRuleContext(hdr, 14, 2)
    assert root.to_string() == "[]"
    assert row.to_string() == "[14 8]"
    assert row.to_string(None, row) == "[]"


def test_accept_children_visits_in_order():
    row = ParserRuleContext(None, -1, 2)
    row.add_child(FieldContext(row, 16, 3))
    row.add_child(Terminal(Tok(1, ",")))
    row.add_child(FieldContext(row, 18, 3))
    visited = []
    row.accept_children(visited)
    assert visited == [("field", 3), ("terminal", ","), ("field", 3)]


def test_accept_children_requires_accept_method():
    ctx = ParserRuleContext()
    ctx.add_child(object())
    with pytest.raises(AttributeError):
        ctx.accept_children([])