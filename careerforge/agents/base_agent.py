import json
import logging
from typing import Any, Dict, List, Optional

from ..core.models import Action, AIRequest, UpstreamRequest
from .prompts import SYSTEM_PROMPTS

# Gemini calls the assistant side of a conversation "model".
ROLE_MAP = {"user": "user", "assistant": "model"}


def _turn(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


class BaseCareerAgent:
    """
    Common prompt assembly for every gateway action.

    An agent turns an `AIRequest` into an `UpstreamRequest`: the action's
    system instruction, then resume context, then job context, then the
    conversation history with roles mapped to Gemini's vocabulary.
    Subclasses set the action and its generation parameters and implement `run`.
    """

    action: Action = Action.CHAT
    temperature: float = 0.7
    response_schema: Optional[Dict[str, Any]] = None

    def __init__(self, gemini_client):
        """
        Args:
            gemini_client: A `GeminiClient` or any object with the same interface.
        """
        self.llm = gemini_client
        self.last_request: Optional[UpstreamRequest] = None

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPTS[self.action.value]

    def _context_turns(self, request: AIRequest) -> List[Dict[str, Any]]:
        turns = []
        if request.resumeData is not None and request.resumeData != "":
            turns.append(_turn("user", f"Resume data:\n{json.dumps(request.resumeData, ensure_ascii=False)}"))
        if request.jobData is not None and request.jobData != "":
            turns.append(_turn("user", f"Job details:\n{json.dumps(request.jobData, ensure_ascii=False)}"))
        return turns

    def _history_turns(self, request: AIRequest) -> List[Dict[str, Any]]:
        return [_turn(ROLE_MAP[m.role], m.content) for m in request.messages]

    def build_request(self, request: AIRequest) -> UpstreamRequest:
        contents = self._context_turns(request) + self._history_turns(request)
        if not contents:
            logging.warning(f"{type(self).__name__}: request has no context or messages")
        self.last_request = UpstreamRequest(
            system_instruction=self.system_prompt,
            contents=contents,
            temperature=self.temperature,
            response_schema=dict(self.response_schema) if self.response_schema is not None else None,
            stream=self.action.streams,
        )
        return self.last_request

    def run(self, request: AIRequest):
        raise NotImplementedError
