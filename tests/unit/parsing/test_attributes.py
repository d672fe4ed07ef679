from llm_blocks.parsing.attributes import parse_attributes


class TestParseAttributes:
    def test_multiple_attributes_keep_order(self) -> None:
        result = parse_attributes(' foo="bar" baz="qux" id="123"')

        assert result == {"foo": "bar", "baz": "qux", "id": "123"}
        assert list(result) == ["foo", "baz", "id"]

    def test_empty_string(self) -> None:
        assert parse_attributes("") == {}

    def test_value_may_contain_markup_and_spaces(self) -> None:
        result = parse_attributes(' description="Get the <title> text"')

        assert result == {"description": "Get the <title> text"}

    def test_empty_value(self) -> None:
        assert parse_attributes(' name=""') == {"name": ""}

    def test_malformed_fragments_are_ignored(self) -> None:
        """Unterminated or unquoted pairs are skipped, not rejected."""
        assert parse_attributes(' a="1" b=2 c="3') == {"a": "1"}

    def test_hyphenated_keys(self) -> None:
        assert parse_attributes(' data-id="7"') == {"data-id": "7"}
