"""Unit tests for the chat-completion stream decoder."""

from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_check as check

from edugame.streaming.decoder import (
    ChatStreamDecoder,
    StreamState,
    accumulate_deltas,
    iter_deltas,
)


def decode_all(chunks: list[bytes]) -> list[str]:
    """Feed every chunk, then flush, collecting all deltas."""
    decoder = ChatStreamDecoder()
    deltas: list[str] = []
    for chunk in chunks:
        deltas.extend(decoder.feed(chunk))
    deltas.extend(decoder.flush())
    return deltas


async def agen(chunks: list[bytes], reads: list[int] | None = None) -> AsyncGenerator[bytes]:
    for i, chunk in enumerate(chunks):
        if reads is not None:
            reads.append(i)
        yield chunk


class TestFrames:
    """Per-line rules of the decoder."""

    def test_yields_content_in_order_until_done(self, sse_frame: Callable[[str], str]) -> None:
        """Valid frames yield their content in order and nothing after [DONE]."""
        body = sse_frame("One") + sse_frame("Two") + "data: [DONE]\n" + sse_frame("Late")
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(body.encode()), ["One", "Two"])
        check.is_true(decoder.done)
        check.equal(decoder.feed(sse_frame("Again").encode()), [])
        check.equal(decoder.flush(), [])

    def test_done_only_stream(self) -> None:
        """A lone sentinel yields nothing and terminates."""
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(b"data: [DONE]\n"), [])
        check.equal(decoder.state, StreamState.DONE)

    def test_keep_alive_and_blank_lines_skipped(self) -> None:
        """Comment and empty lines are ignored."""
        body = b': keep-alive\n\ndata: {"choices":[{"delta":{"content":"Hi"}}]}\n'

        assert decode_all([body]) == ["Hi"]

    def test_comment_line_never_produces_output(self) -> None:
        """A comment is skipped even when it looks like a frame."""
        body = b': data: {"choices":[{"delta":{"content":"hidden"}}]}\n'

        assert decode_all([body]) == []

    def test_other_sse_fields_ignored(self, sse_frame: Callable[[str], str]) -> None:
        """Lines such as `event:` and `id:` are skipped."""
        body = "event: message\nid: 7\nretry: 1000\n" + sse_frame("ok")

        assert decode_all([body.encode()]) == ["ok"]

    def test_data_without_space_ignored(self) -> None:
        """Only the exact `data: ` prefix marks a frame."""
        body = b'data:{"choices":[{"delta":{"content":"x"}}]}\n'

        assert decode_all([body]) == []

    def test_crlf_line_endings(self) -> None:
        """Trailing carriage returns are stripped."""
        body = b'data: {"choices":[{"delta":{"content":"A"}}]}\r\ndata: [DONE]\r\n'
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(body), ["A"])
        check.is_true(decoder.done)

    @pytest.mark.parametrize(
        "payload",
        [
            '{"choices":[]}',
            '{"choices":[{"delta":{}}]}',
            '{"choices":[{"delta":{"role":"assistant"}}]}',
            '{"choices":[{"delta":{"content":null}}]}',
            '{"choices":[{"delta":{"content":""}}]}',
            '{"choices":[{"delta":{"content":42}}]}',
            '{"usage":{"total_tokens":12}}',
            "[1, 2, 3]",
        ],
    )
    def test_missing_content_yields_nothing(
        self, payload: str, sse_frame: Callable[[str], str]
    ) -> None:
        """JSON without a non-empty content string is skipped, not terminal."""
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(f"data: {payload}\n".encode()), [])
        check.is_false(decoder.done)
        check.equal(decoder.feed(sse_frame("next").encode()), ["next"])

    def test_invalid_utf8_is_replaced(self) -> None:
        """Invalid bytes decode to U+FFFD instead of raising."""
        body = b'data: {"choices":[{"delta":{"content":"a\xffb"}}]}\n'

        assert decode_all([body]) == ["a\ufffdb"]


class TestChunkBoundaries:
    """Frames split across chunks decode the same as unsplit input."""

    def test_split_frame_completes_on_next_chunk(self) -> None:
        """A frame cut mid-JSON yields once its line is complete."""
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(b'data: {"choices":[{"delta":{"content":"Hel'), [])
        check.equal(decoder.feed(b'lo"}}]}\n'), ["Hello"])
        check.equal(decoder.feed(b"data: [DONE]\n"), [])
        check.is_true(decoder.done)

    def test_every_two_way_split_matches_unsplit(
        self, sse_frame: Callable[[str], str]
    ) -> None:
        """Splitting anywhere, including inside a multi-byte character, changes nothing."""
        body = (
            ": ping\n" + sse_frame("Grüße ") + sse_frame("日本 ") + sse_frame("🌍") + "data: [DONE]\n"
        ).encode()
        expected = ["Grüße ", "日本 ", "🌍"]

        for i in range(len(body) + 1):
            check.equal(decode_all([body[:i], body[i:]]), expected, f"split at {i}")

    def test_byte_at_a_time(self, sse_frame: Callable[[str], str]) -> None:
        """Single-byte chunks still decode every fragment."""
        body = (sse_frame("é") + sse_frame("ok") + "data: [DONE]\n").encode()

        assert decode_all([body[i : i + 1] for i in range(len(body))]) == ["é", "ok"]


class TestFlush:
    """End-of-stream handling."""

    def test_unterminated_last_frame_is_flushed(self, sse_frame: Callable[[str], str]) -> None:
        """The last frame yields even without newline or sentinel."""
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(sse_frame("first").encode()), ["first"])
        check.equal(decoder.feed(sse_frame("last").rstrip("\n").encode()), [])
        check.equal(decoder.flush(), ["last"])
        check.is_true(decoder.done)

    def test_truncated_tail_is_dropped(self, sse_frame: Callable[[str], str]) -> None:
        """An unparseable trailing partial line is silently dropped."""
        chunks = [sse_frame("kept").encode(), b'data: {"choices":[{"del']

        assert decode_all(chunks) == ["kept"]

    def test_sentinel_without_newline_terminates(self) -> None:
        """The sentinel is honored on the flushed final line."""
        decoder = ChatStreamDecoder()
        decoder.feed(b"data: [DONE]")

        check.equal(decoder.flush(), [])
        check.equal(decoder.state, StreamState.DONE)

    def test_invalid_line_holds_later_lines_until_flush(
        self, sse_frame: Callable[[str], str]
    ) -> None:
        """A complete but invalid line waits; flush drops it and emits the rest."""
        decoder = ChatStreamDecoder()

        check.equal(decoder.feed(("data: not-json\n" + sse_frame("after")).encode()), [])
        check.equal(decoder.flush(), ["after"])

    def test_flush_twice_is_noop(self, sse_frame: Callable[[str], str]) -> None:
        decoder = ChatStreamDecoder()
        decoder.feed(sse_frame("x").rstrip("\n").encode())

        check.equal(decoder.flush(), ["x"])
        check.equal(decoder.flush(), [])


class TestAsyncHelpers:
    """iter_deltas and accumulate_deltas."""

    async def test_iter_deltas_yields_fragments(self, sse_frame: Callable[[str], str]) -> None:
        chunks = [sse_frame("a").encode(), sse_frame("b").encode()[:10], sse_frame("b").encode()[10:]]

        deltas = [delta async for delta in iter_deltas(agen(chunks))]

        assert deltas == ["a", "b"]

    async def test_iter_deltas_stops_reading_after_sentinel(
        self, sse_frame: Callable[[str], str]
    ) -> None:
        """No chunk is requested once [DONE] has been seen."""
        reads: list[int] = []
        chunks = [sse_frame("x").encode(), b"data: [DONE]\n", sse_frame("y").encode()]

        deltas = [delta async for delta in iter_deltas(agen(chunks, reads))]

        check.equal(deltas, ["x"])
        check.equal(reads, [0, 1])

    async def test_iter_deltas_reads_lazily(self, sse_frame: Callable[[str], str]) -> None:
        """The next chunk is read only after the previous fragments are consumed."""
        reads: list[int] = []
        chunks = [sse_frame("one").encode(), sse_frame("two").encode()]
        stream = iter_deltas(agen(chunks, reads))

        first = await anext(stream)

        check.equal(first, "one")
        check.equal(reads, [0])
        await stream.aclose()

    async def test_accumulate_calls_back_per_fragment(self) -> None:
        """The callback sees each fragment and the message built so far."""
        seen: list[tuple[str, str]] = []

        async def fragments() -> AsyncGenerator[str]:
            for text in ["Hel", "lo", "!"]:
                yield text

        result = await accumulate_deltas(fragments(), lambda d, acc: seen.append((d, acc)))

        check.equal(result, "Hello!")
        check.equal(seen, [("Hel", "Hel"), ("lo", "Hello"), ("!", "Hello!")])

    async def test_accumulate_empty_stream(self) -> None:
        assert await accumulate_deltas(iter_deltas(agen([b"data: [DONE]\n"]))) == ""

    async def test_iter_deltas_closes_source_after_sentinel(
        self, sse_frame: Callable[[str], str]
    ) -> None:
        """Returning on [DONE] closes the chunk source instead of leaving it open."""
        closed: list[bool] = []

        async def source() -> AsyncGenerator[bytes]:
            try:
                yield sse_frame("x").encode()
                yield b"data: [DONE]\n"
                yield sse_frame("never").encode()
            finally:
                closed.append(True)

        deltas = [delta async for delta in iter_deltas(source())]

        check.equal(deltas, ["x"])
        check.equal(closed, [True])
