import logging

from ..core.models import Action, AIRequest
from ..core.stream_transcoder import SSEStream
from .base_agent import BaseCareerAgent


class CareerCoachAgent(BaseCareerAgent):
    """
    Conversational career coach served as a live SSE stream.

    `run` opens the upstream stream before returning so that rejected calls
    (rate limits, exhausted quota) surface as ordinary error responses; only
    the body is consumed lazily by the caller.
    """

    action = Action.CHAT
    temperature = 0.7

    def run(self, request: AIRequest) -> SSEStream:
        upstream_request = self.build_request(request)
        response = self.llm.open_stream(upstream_request)
        logging.info(f"Chat stream opened with {len(upstream_request.contents)} turn(s)")
        return SSEStream(response)
