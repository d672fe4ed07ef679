# src/llm_blocks/parsing/buffer.py


class ChunkBuffer:
    """Unconsumed residue of a fragmented text stream.

    Only the part that has not been consumed yet is kept, so memory is
    bounded by the longest unresolved tag prefix rather than the stream.
    """

    def __init__(self) -> None:
        self._data = ""

    def append(self, fragment: str) -> None:
        self._data += fragment

    def peek(self) -> str:
        return self._data

    def consume(self, n: int) -> str:
        """Remove and return the first ``n`` characters."""
        if n < 0:
            raise ValueError("n must be >= 0")
        head, self._data = self._data[:n], self._data[n:]
        return head

    def drain(self) -> str:
        """Remove and return everything buffered."""
        return self.consume(len(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)
