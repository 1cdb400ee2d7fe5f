from adminforms.utils import apply_saved_order, field_key, is_blank, join_order, parse_order


def test_field_key_uses_bracket_notation():
    assert field_key("basics", "title") == "basics[title]"


def test_parse_order_strips_blanks():
    assert parse_order(" c, a,,b ") == ["c", "a", "b"]
    assert parse_order("") == []
    assert parse_order(None) == []
    assert parse_order(["x", "y"]) == ["x", "y"]


def test_join_order():
    assert join_order(["c", "a", "b"]) == "c,a,b"


def test_apply_saved_order_puts_saved_keys_first():
    items = {"a": "A", "b": "B", "c": "C"}

    result = apply_saved_order(items, "c,a")

    assert list(result) == ["c", "a", "b"]
    assert result["c"] == "C"


def test_apply_saved_order_without_saved_order_keeps_declaration():
    items = {"a": "A", "b": "B", "c": "C"}
    assert list(apply_saved_order(items, "")) == ["a", "b", "c"]
    assert list(apply_saved_order(items, None)) == ["a", "b", "c"]


def test_apply_saved_order_ignores_keys_no_longer_declared():
    items = {"a": "A", "b": "B"}
    assert list(apply_saved_order(items, "z,b")) == ["b", "a"]


def test_apply_saved_order_keeps_unsaved_keys_in_declared_order():
    items = {"a": 1, "b": 2, "c": 3, "d": 4}
    assert list(apply_saved_order(items, "d")) == ["d", "a", "b", "c"]


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert not is_blank(0)
    assert not is_blank("x")


def test_apply_saved_order_with_repeated_saved_keys():
    items = {"x": "X", "b": "B", "a": "A"}
    assert list(apply_saved_order(items, "a,a,b")) == ["a", "b", "x"]
