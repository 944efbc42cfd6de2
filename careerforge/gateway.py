import logging
from functools import lru_cache
from typing import Union

from fastapi import Depends
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from .agents import get_agent
from .core.config import Settings, get_settings
from .core.credit_ledger import CreditLedger
from .core.errors import UpstreamMisconfigured
from .core.gemini_client import GeminiClient
from .core.mock_client import MockGeminiClient
from .core.models import AIRequest, User

SSE_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}


class AIGateway:
    """
    Serves one gateway request end to end.

    Order of work per request: debit a credit, assemble the action's prompt,
    issue exactly one upstream call, then return either the transcoded SSE
    stream (chat) or the normalized JSON body (analyze, enhance, cover-letter).
    A denied debit stops the request before any upstream call.
    """

    def __init__(self, gemini_client, credit_ledger: CreditLedger, credits_per_request: int = 1):
        self.gemini_client = gemini_client
        self.credit_ledger = credit_ledger
        self.credits_per_request = credits_per_request

    def handle(self, request: AIRequest, user: User) -> Union[StreamingResponse, JSONResponse]:
        logging.info(f"ai-career request: action={request.action.value} uid={user.uid}")
        self.credit_ledger.debit(user.uid, self.credits_per_request)

        agent = get_agent(request.action, self.gemini_client)
        result = agent.run(request)

        if request.action.streams:
            return StreamingResponse(
                result,
                media_type="text/event-stream",
                headers=SSE_HEADERS,
                background=BackgroundTask(result.close),
            )
        return JSONResponse(result)


@lru_cache
def get_gemini_client():
    """The process-wide upstream client; a labelled mock when no API key is configured."""
    try:
        return GeminiClient.from_settings(get_settings())
    except UpstreamMisconfigured:
        return MockGeminiClient()


def get_gateway(settings: Settings = Depends(get_settings)) -> AIGateway:
    return AIGateway(
        gemini_client=get_gemini_client(),
        credit_ledger=CreditLedger.from_settings(settings),
        credits_per_request=settings.credits_per_request,
    )
