"""In-memory sink adapter."""


class InMemorySink:
    """In-memory implementation of TextSink.

    Keeps every written line in a list. Suitable for testing and for
    embedding the rendered output somewhere else.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, text: str, /) -> int:
        """Store one rendered line."""
        self._lines.append(text)
        return len(text)

    @property
    def lines(self) -> list[str]:
        """Written lines, newline included, in write order."""
        return list(self._lines)

    def getvalue(self) -> str:
        return "".join(self._lines)

    def clear(self) -> None:
        self._lines.clear()
