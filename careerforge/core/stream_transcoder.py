"""
Transcodes Gemini's streamed generateContent output into OpenAI-style SSE deltas.

The upstream body arrives as arbitrary byte chunks. Complete values are found
by splitting on newlines; each line is either array punctuation from the
JSON-array framing (`[`, `,`, `]`), an SSE `data:` line, or one JSON object.
Only the trailing, not yet newline-terminated segment is buffered between reads.
"""
import codecs
import json
import logging
from typing import Any, Iterable, Iterator, List, Optional

import requests

from .errors import UpstreamStreamError

ARRAY_PUNCTUATION = frozenset(["[", "]", ","])


def format_sse_delta(text: str) -> str:
    """Wraps one text fragment as a single SSE event in the shape the web client consumes."""
    payload = {"choices": [{"delta": {"content": text}}]}
    return f"data: {json.dumps(payload, ensure_ascii=False, separators=(',', ':'))}\n\n"


def extract_text(payload: Any) -> Optional[str]:
    """Returns the text carried by one Gemini stream object, or None if it has none."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [
        p["text"] for p in parts
        if isinstance(p, dict) and isinstance(p.get("text"), str) and not p.get("thought")
    ]
    return "".join(texts) or None


class StreamTranscoder:
    """
    Pull-driven state machine turning upstream byte chunks into SSE events.

    Call `feed()` with each chunk as it is read; it returns the events that
    became complete. Segments that fail to parse are dropped and the stream
    continues. `close()` discards any unterminated remainder.
    """

    def __init__(self):
        # Chunks may end inside a multi-byte UTF-8 sequence.
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.buffer = ""
        self.events_emitted = 0
        self.segments_dropped = 0

    def _parse_segment(self, segment: str) -> Optional[Any]:
        segment = segment.strip()
        if segment.startswith("data:"):
            segment = segment[len("data:"):].strip()
        if segment in ARRAY_PUNCTUATION:
            return None
        # Array framing can share a line with an object: `[{...}` or `,{...}]`
        segment = segment.lstrip("[,").rstrip(",]").strip()
        if not segment or segment == "[DONE]":
            return None
        try:
            return json.loads(segment)
        except json.JSONDecodeError:
            self.segments_dropped += 1
            logging.debug(f"Dropping unparseable stream segment: {segment[:80]}")
            return None

    def feed(self, chunk) -> List[str]:
        """
        Appends a chunk to the buffer and returns SSE events for every complete segment.

        Raises:
            UpstreamStreamError: If the upstream embeds an error object in the stream.
        """
        if isinstance(chunk, bytes):
            self.buffer += self._decoder.decode(chunk)
        else:
            self.buffer += chunk

        events = []
        lines = self.buffer.split("\n")
        self.buffer = lines.pop()
        for line in lines:
            payload = self._parse_segment(line)
            if payload is None:
                continue
            if isinstance(payload, dict) and payload.get("error"):
                logging.error(f"Upstream reported an error mid-stream: {payload['error']}")
                raise UpstreamStreamError()
            text = extract_text(payload)
            if text:
                events.append(format_sse_delta(text))
        self.events_emitted += len(events)
        return events

    def close(self) -> None:
        if self.buffer.strip():
            logging.debug(f"Discarding unterminated stream remainder ({len(self.buffer)} chars)")
        self.buffer = ""
        self._decoder.reset()


def transcode_stream(chunks: Iterable[bytes]) -> Iterator[str]:
    """Yields SSE events for an iterable of raw upstream chunks, in upstream order."""
    transcoder = StreamTranscoder()
    for chunk in chunks:
        if not chunk:
            continue
        for event in transcoder.feed(chunk):
            yield event
    transcoder.close()
    logging.info(
        f"Stream finished: {transcoder.events_emitted} delta(s), "
        f"{transcoder.segments_dropped} segment(s) dropped"
    )


def stream_sse_events(response: Any, chunk_size: int = 1024) -> Iterator[str]:
    """
    Reads an open upstream response one chunk at a time and yields SSE events.

    The upstream connection is closed when the stream ends, when the reader
    stops early (client disconnect closes this generator), or on error.

    Raises:
        UpstreamStreamError: If reading the upstream body fails mid-stream.
    """
    try:
        yield from transcode_stream(response.iter_content(chunk_size=chunk_size))
    except requests.exceptions.RequestException as e:
        logging.error(f"Upstream stream read failed: {e}")
        raise UpstreamStreamError() from e
    finally:
        response.close()


class SSEStream:
    """
    Iterable SSE body bound to one open upstream response.

    `close()` closes the upstream connection and can be called from outside
    the iteration, e.g. as a response background task after a disconnect.
    """

    def __init__(self, response: Any, chunk_size: int = 1024):
        self.response = response
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[str]:
        return stream_sse_events(self.response, self.chunk_size)

    def close(self) -> None:
        self.response.close()
