import pytest

from llm_blocks.blocks.models import BlockEvent, DataBlock, EventType, TextBlock


class TestBlocks:
    def test_text_block_type(self) -> None:
        assert TextBlock(id="1", content="hi").type == "text"

    def test_data_block_defaults(self) -> None:
        block = DataBlock(id="1", tag="script")

        assert block.type == "data"
        assert block.attributes == {}
        assert block.content == ""
        assert block.result is None
        assert block.error is None

    def test_blocks_are_frozen(self) -> None:
        """Snapshots are immutable."""
        block = TextBlock(id="1", content="hi")

        with pytest.raises(AttributeError):
            block.content = "modified"  # type: ignore

    def test_event_exposes_block_id(self) -> None:
        event = BlockEvent(EventType.CREATE, DataBlock(id="abc", tag="file"))

        assert event.block_id == "abc"

    def test_event_type_values(self) -> None:
        assert [t.value for t in EventType] == ["create", "update", "complete"]

    def test_data_blocks_are_hashable(self) -> None:
        """Blocks with attributes and a structured result can go in sets."""
        block = DataBlock(
            id="1", tag="file", attributes={"path": "a.py"}, result={"ok": True}
        )
        same = DataBlock(
            id="1", tag="file", attributes={"path": "a.py"}, result={"ok": True}
        )

        assert hash(block) == hash(same)
        assert {block, same} == {block}
        assert len({block, DataBlock(id="2", tag="file")}) == 2

    def test_events_are_hashable(self) -> None:
        event = BlockEvent(
            EventType.COMPLETE, DataBlock(id="1", tag="a", attributes={"k": "v"})
        )

        assert event in {event}
