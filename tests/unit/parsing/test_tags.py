import pytest

from llm_blocks.parsing.tags import (
    ScanMode,
    find_partial_prefix,
    match_close_tag,
    match_open_tag,
)


class TestMatchOpenTag:
    def test_matches_tag_with_text_before(self) -> None:
        buffer = 'Hello <script description="x">code'
        match = match_open_tag(buffer)

        assert match is not None
        assert match.text_before == "Hello "
        assert match.tag_name == "script"
        assert match.attributes_raw == ' description="x"'
        assert match.matched_length == len('Hello <script description="x">')

    def test_matches_tag_without_attributes(self) -> None:
        match = match_open_tag("<file>")

        assert match is not None
        assert match.tag_name == "file"
        assert match.attributes_raw == ""
        assert match.matched_length == 6

    def test_hyphenated_tag_name(self) -> None:
        match = match_open_tag('<custom-tag foo="bar">')

        assert match is not None
        assert match.tag_name == "custom-tag"

    def test_attribute_value_may_contain_angle_brackets(self) -> None:
        match = match_open_tag('<script description="a > b">')

        assert match is not None
        assert match.attributes_raw == ' description="a > b"'

    def test_no_tag(self) -> None:
        assert match_open_tag("no tags here") is None

    def test_incomplete_tag_is_not_matched(self) -> None:
        assert match_open_tag("text <scri") is None

    def test_earlier_partial_tag_blocks_later_complete_tag(self) -> None:
        """A later tag cannot be classified while an earlier one may grow."""
        assert match_open_tag('<a x="1<b>') is None

    def test_non_tag_angle_bracket_is_skipped(self) -> None:
        match = match_open_tag("1 < 2 and <b>")

        assert match is not None
        assert match.text_before == "1 < 2 and "
        assert match.tag_name == "b"

    def test_close_tag_is_not_an_open_tag(self) -> None:
        assert match_open_tag("</script>") is None

    def test_whitespace_before_bracket_is_not_a_tag(self) -> None:
        assert match_open_tag('<div class="a" >') is None

    def test_attribute_without_value_is_not_a_tag(self) -> None:
        assert match_open_tag("<a b>") is None


class TestMatchCloseTag:
    def test_consumes_single_trailing_newline(self) -> None:
        match = match_close_tag("code</script>\nmore", "script")

        assert match is not None
        assert match.data_before == "code"
        assert match.matched_length == len("code</script>\n")

    def test_without_trailing_newline(self) -> None:
        match = match_close_tag("code</script>more", "script")

        assert match is not None
        assert match.matched_length == len("code</script>")

    def test_only_one_newline_is_consumed(self) -> None:
        match = match_close_tag("x</a>\n\ny", "a")

        assert match is not None
        assert match.matched_length == len("x</a>\n")

    def test_close_tag_at_end_waits_for_more_input(self) -> None:
        """The optional newline after the tag is not known yet."""
        assert match_close_tag("code</script>", "script") is None

    def test_close_tag_at_end_matches_when_final(self) -> None:
        match = match_close_tag("code</script>", "script", final=True)

        assert match is not None
        assert match.data_before == "code"
        assert match.matched_length == len("code</script>")

    def test_other_tag_name_does_not_match(self) -> None:
        assert match_close_tag("code</file>\n", "script") is None

    def test_tag_names_are_case_sensitive(self) -> None:
        assert match_close_tag("x</Script>\n", "script") is None


class TestFindPartialPrefix:
    @pytest.mark.parametrize(
        ("buffer", "expected"),
        [
            ("code</scr", 4),
            ("code<", 4),
            ("code</", 4),
            ("code</script>", 4),
            ("code", None),
            ("a</x", None),
            ("", None),
        ],
    )
    def test_close_mode(self, buffer: str, expected: int | None) -> None:
        assert find_partial_prefix(buffer, ScanMode.CLOSE, "script") == expected

    @pytest.mark.parametrize(
        ("buffer", "expected"),
        [
            ("text <scri", 5),
            ("<", 0),
            ('x <a href="ht', 2),
            ('x <a href="1"', 2),
            ('x <a href="1" ', 2),
            ("x <a href", 2),
            ("x <a href=", 2),
            ("a < b", None),
            ("x <1", None),
            ('a <b c="1"d', None),
            ("plain", None),
        ],
    )
    def test_open_mode(self, buffer: str, expected: int | None) -> None:
        assert find_partial_prefix(buffer, ScanMode.OPEN) == expected

    def test_close_mode_requires_tag_name(self) -> None:
        with pytest.raises(ValueError, match="tag_name is required"):
            find_partial_prefix("x", ScanMode.CLOSE)
