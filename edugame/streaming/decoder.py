"""Decoder for OpenAI-compatible chat-completion event streams.

The doubt-solver function relays the gateway's body unchanged:

    data: {"choices":[{"delta":{"content":"Hel"}}]}
    data: {"choices":[{"delta":{"content":"lo"}}]}
    data: [DONE]

Chunks arrive with no alignment to lines or to UTF-8 character boundaries,
so the decoder buffers text and only parses complete lines. A line whose
JSON does not parse is treated as cut short and waits for the next chunk.
"""

import codecs
import json
import logging
from collections.abc import AsyncGenerator, AsyncIterable, Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class StreamState(str, Enum):
    """Lifecycle of a single streaming exchange."""

    STREAMING = "streaming"
    DONE = "done"


class _IncompleteFrame(Exception):
    """Frame payload is not valid JSON yet."""


def _extract_content(payload: Any) -> str | None:
    """Read `choices[0].delta.content` without trusting the payload shape."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    if isinstance(content, str) and content:
        return content
    return None


class ChatStreamDecoder:
    """Push-style decoder: feed byte chunks in, get text deltas out.

    One decoder serves one exchange. Once the sentinel is seen or the
    stream is flushed, the decoder is DONE and ignores further input.

    Example:
        decoder = ChatStreamDecoder()
        for chunk in chunks:
            for delta in decoder.feed(chunk):
                render(delta)
        for delta in decoder.flush():
            render(delta)
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.state = StreamState.STREAMING

    @property
    def done(self) -> bool:
        """Whether the exchange has terminated."""
        return self.state is StreamState.DONE

    def feed(self, chunk: bytes) -> list[str]:
        """Decode a chunk and return the deltas of every line it completes.

        Args:
            chunk: Raw bytes as received from the network.

        Returns:
            Text fragments in arrival order, possibly empty.
        """
        if self.done:
            return []

        self._buffer += self._decoder.decode(chunk)

        deltas: list[str] = []
        while not self.done:
            newline = self._buffer.find("\n")
            if newline == -1:
                break

            line = self._buffer[:newline]
            self._buffer = self._buffer[newline + 1 :]
            if line.endswith("\r"):
                line = line[:-1]

            try:
                delta = self._parse_line(line)
            except _IncompleteFrame:
                self._buffer = line + "\n" + self._buffer
                break

            if delta:
                deltas.append(delta)

        if self.done:
            self._buffer = ""
        return deltas

    def flush(self) -> list[str]:
        """Process whatever is left once the underlying stream has ended.

        The final line may lack its newline. Lines that still fail to parse
        are dropped.

        Returns:
            Remaining text fragments in order.
        """
        if self.done:
            return []

        self._buffer += self._decoder.decode(b"", final=True)
        remainder, self._buffer = self._buffer, ""

        deltas: list[str] = []
        for raw in remainder.split("\n"):
            if self.done:
                break
            if raw.endswith("\r"):
                raw = raw[:-1]
            try:
                delta = self._parse_line(raw)
            except _IncompleteFrame:
                logger.debug(f"Dropping incomplete trailing frame: {raw[:80]!r}")
                continue
            if delta:
                deltas.append(delta)

        self.state = StreamState.DONE
        return deltas

    def _parse_line(self, line: str) -> str | None:
        """Apply the per-line rules to one line without its terminator.

        Returns:
            The delta text, or None if the line carries no content.

        Raises:
            _IncompleteFrame: If the payload is not parseable JSON.
        """
        if not line.strip() or line.startswith(":"):
            return None
        if not line.startswith(DATA_PREFIX):
            return None

        payload = line[len(DATA_PREFIX) :].strip()
        if payload == DONE_SENTINEL:
            self.state = StreamState.DONE
            return None

        try:
            parsed = json.loads(payload)
        except json.JSONDecodeError as e:
            raise _IncompleteFrame(payload) from e

        return _extract_content(parsed)


async def iter_deltas(chunks: AsyncIterable[bytes]) -> AsyncGenerator[str]:
    """Yield text deltas from an async byte stream.

    Reads the next chunk only after every delta of the previous one has been
    consumed, and stops reading as soon as the sentinel arrives. The chunk
    source is closed when this generator finishes or is closed, if it
    supports `aclose()`.

    Args:
        chunks: Byte chunks, e.g. `httpx.Response.aiter_bytes()`.

    Yields:
        Non-empty text fragments in arrival order.
    """
    decoder = ChatStreamDecoder()

    try:
        async for chunk in chunks:
            for delta in decoder.feed(chunk):
                yield delta
            if decoder.done:
                return

        for delta in decoder.flush():
            yield delta
    finally:
        aclose = getattr(chunks, "aclose", None)
        if aclose is not None:
            await aclose()


async def accumulate_deltas(
    deltas: AsyncIterable[str],
    on_delta: Callable[[str, str], None] | None = None,
) -> str:
    """Build the assistant message from a delta stream.

    Args:
        deltas: Text fragments, e.g. from `iter_deltas`.
        on_delta: Called with (fragment, accumulated) after each append,
            before the next fragment is requested.

    Returns:
        The concatenation of all fragments.
    """
    accumulated = ""
    async for delta in deltas:
        accumulated += delta
        if on_delta is not None:
            on_delta(delta, accumulated)
    return accumulated
