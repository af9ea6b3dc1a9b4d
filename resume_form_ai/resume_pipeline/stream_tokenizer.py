"""Reassemble a chunked model response into complete lines."""

from typing import AsyncIterable, AsyncIterator, List, Optional

LINE_TERMINATOR = "\n"


class LineBuffer:
    """
    Accumulates text fragments and hands back every complete line.
    Lines are trimmed and blank lines skipped, so the output does not depend
    on where the upstream chunking happened to cut the text.
    """

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, fragment: Optional[str]) -> List[str]:
        """Append a fragment and return the lines it completed, in order."""
        if not fragment:
            return []
        self._buffer += fragment
        lines: List[str] = []
        while True:
            index = self._buffer.find(LINE_TERMINATOR)
            if index == -1:
                break
            line = self._buffer[:index].strip()
            self._buffer = self._buffer[index + 1:]
            if line:
                lines.append(line)
        return lines

    def flush(self) -> Optional[str]:
        """Return the unterminated tail (trimmed) once the stream has ended."""
        tail = self._buffer.strip()
        self._buffer = ""
        return tail or None

    @property
    def pending(self) -> str:
        return self._buffer


async def iter_lines(fragments: AsyncIterable[Optional[str]]) -> AsyncIterator[str]:
    """Yield complete lines from an async fragment source, then the trailing fragment."""
    buffer = LineBuffer()
    async for fragment in fragments:
        for line in buffer.feed(fragment):
            yield line
    tail = buffer.flush()
    if tail:
        yield tail
