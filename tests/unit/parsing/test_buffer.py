import pytest

from llm_blocks.parsing.buffer import ChunkBuffer


class TestChunkBuffer:
    def test_starts_empty(self) -> None:
        buffer = ChunkBuffer()

        assert buffer.peek() == ""
        assert len(buffer) == 0
        assert not buffer

    def test_append_accumulates_fragments(self) -> None:
        buffer = ChunkBuffer()
        buffer.append("hel")
        buffer.append("lo")

        assert buffer.peek() == "hello"
        assert len(buffer) == 5

    def test_consume_removes_prefix(self) -> None:
        """Consumed characters are returned and no longer retained."""
        buffer = ChunkBuffer()
        buffer.append("hello world")

        assert buffer.consume(6) == "hello "
        assert buffer.peek() == "world"

    def test_consume_more_than_available(self) -> None:
        buffer = ChunkBuffer()
        buffer.append("abc")

        assert buffer.consume(10) == "abc"
        assert buffer.peek() == ""

    def test_drain_empties_buffer(self) -> None:
        buffer = ChunkBuffer()
        buffer.append("<scri")

        assert buffer.drain() == "<scri"
        assert not buffer

    def test_consume_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="n must be >= 0"):
            ChunkBuffer().consume(-1)
