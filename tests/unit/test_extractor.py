import pytest

from httpchain_pool import Index, Key, KeyNotFoundError, ValuePath

RESPONSE = {"a": {"b": [10, 20, 30]}}


class TestParse:
    def test_empty_string_is_identity(self):
        assert ValuePath.parse("") == ValuePath()
        assert ValuePath.parse("").selectors == ()

    def test_segments(self):
        assert ValuePath.parse("a.b.1").selectors == (Key("a"), Key("b"), Index(1))

    def test_numeric_segments_are_indices(self):
        """Leading zeros still parse as a number, signs do not."""
        assert ValuePath.parse("01").selectors == (Index(1),)
        assert ValuePath.parse("-1").selectors == (Key("-1"),)
        assert ValuePath.parse("+5").selectors == (Key("+5"),)
        assert ValuePath.parse("1e3").selectors == (Key("1e3"),)

    def test_str_renders_dotted_form(self):
        assert str(ValuePath.parse("data.items.0.id")) == "data.items.0.id"
        assert str(ValuePath()) == ""

    def test_paths_are_immutable(self):
        path = ValuePath.parse("a")
        with pytest.raises(AttributeError):
            path.selectors = ()


class TestApply:
    def test_identity_returns_value_unchanged(self):
        assert ValuePath.parse("").apply(RESPONSE) is RESPONSE

    def test_nested_lookup(self):
        assert ValuePath.parse("a.b.1").apply(RESPONSE) == 20
        assert ValuePath.parse("a.b").apply(RESPONSE) == [10, 20, 30]

    def test_index_out_of_range(self):
        with pytest.raises(KeyNotFoundError, match="Selector '9' not found") as exc_info:
            ValuePath.parse("a.b.9").apply(RESPONSE)
        assert exc_info.value.selector == Index(9)

    def test_missing_key(self):
        with pytest.raises(KeyNotFoundError, match="Selector 'c' not found"):
            ValuePath.parse("a.c").apply(RESPONSE)

    def test_numeric_segment_never_matches_object_key(self):
        with pytest.raises(KeyNotFoundError):
            ValuePath.parse("1").apply({"1": "one"})

    def test_key_on_array(self):
        with pytest.raises(KeyNotFoundError):
            ValuePath.parse("a.b.first").apply(RESPONSE)

    def test_selector_on_scalar(self):
        with pytest.raises(KeyNotFoundError):
            ValuePath.parse("a.b.0.x").apply(RESPONSE)

    def test_falsy_values_are_found(self):
        assert ValuePath.parse("x").apply({"x": None}) is None
        assert ValuePath.parse("0").apply([False]) is False
