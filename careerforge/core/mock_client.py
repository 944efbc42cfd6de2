import json
import logging
from typing import Iterator, List

from .models import UpstreamRequest

MOCK_LABEL = "[Mock response: GEMINI_API_KEY is not configured]"

MOCK_CHAT_TEXT = (
    f"{MOCK_LABEL} This is placeholder output from the CareerForge AI coach. "
    "Configure an API key on the server to receive real career advice."
)

MOCK_ANALYSIS = {
    "overall_score": 0,
    "formatting_score": 0,
    "keyword_score": 0,
    "structure_score": 0,
    "content_score": 0,
    "issues": [
        {
            "title": "Mock Analysis",
            "description": f"{MOCK_LABEL} No real analysis was performed.",
            "severity": "info",
        }
    ],
    "recommended_keywords": [],
    "suggestions": ["Configure GEMINI_API_KEY on the server to enable ATS analysis."],
}


class MockStreamResponse:
    """Stands in for an open streaming HTTP response, framed the way Gemini frames SSE."""

    def __init__(self, text: str, words_per_event: int = 4):
        words = text.split(" ")
        self._pieces: List[str] = [
            " ".join(words[i:i + words_per_event]) + (" " if i + words_per_event < len(words) else "")
            for i in range(0, len(words), words_per_event)
        ]
        self.closed = False

    def iter_content(self, chunk_size: int = 1024) -> Iterator[bytes]:
        for piece in self._pieces:
            if self.closed:
                return
            payload = {"candidates": [{"content": {"role": "model", "parts": [{"text": piece}]}}]}
            yield f"data: {json.dumps(payload)}\r\n\r\n".encode("utf-8")

    def close(self) -> None:
        self.closed = True


class MockGeminiClient:
    """
    Placeholder upstream used when no Gemini credential is configured.

    Mirrors `GeminiClient`'s interface so every action still produces a
    well-formed, clearly labelled response and the rest of the system stays
    usable without live credentials.
    """

    model_name = "mock"

    def __init__(self):
        logging.warning("GEMINI_API_KEY not set; serving labelled mock responses.")

    def generate_text(self, request: UpstreamRequest) -> str:
        if request.response_schema is not None:
            return json.dumps(MOCK_ANALYSIS)
        return f"{MOCK_LABEL} Placeholder output; no content was generated."

    def open_stream(self, request: UpstreamRequest) -> MockStreamResponse:
        return MockStreamResponse(MOCK_CHAT_TEXT)
