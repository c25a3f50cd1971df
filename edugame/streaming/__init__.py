"""Incremental decoding of chat-completion event streams.

Turns the raw bytes of a `data: {json}` event stream into ordered text
deltas that the caller appends to the assistant message it is rendering.

Responsibilities:
    - Stateful UTF-8 decoding across arbitrary chunk boundaries
    - Line framing, comment and unknown-field skipping
    - `[DONE]` sentinel handling and end-of-stream flush
    - Caller-side accumulation with a per-fragment callback
"""

from edugame.streaming.decoder import (
    DONE_SENTINEL,
    ChatStreamDecoder,
    StreamState,
    accumulate_deltas,
    iter_deltas,
)

__all__ = [
    "DONE_SENTINEL",
    "ChatStreamDecoder",
    "StreamState",
    "accumulate_deltas",
    "iter_deltas",
]
