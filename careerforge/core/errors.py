"""
Error taxonomy for the AI gateway.

Every error that can reach a client derives from `GatewayError` and carries
the HTTP status and the message the client is allowed to see. Upstream error
bodies are logged server-side and never copied into these messages.
"""
import logging


class GatewayError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class Unauthorized(GatewayError):
    status_code = 401
    message = "Unauthorized"


class InsufficientCredits(GatewayError):
    status_code = 402
    message = "Insufficient credits. Please add credits to continue."


class UpstreamRateLimited(GatewayError):
    status_code = 429
    message = "Rate limited. Please try again shortly."


class UpstreamQuotaExhausted(GatewayError):
    status_code = 402
    message = "AI credits exhausted. Please add credits."


class UpstreamGenericFailure(GatewayError):
    status_code = 500
    message = "AI service error"


class UpstreamMisconfigured(GatewayError):
    """Raised when no upstream credential is configured. Handled by falling back to mock output."""
    message = "GEMINI_API_KEY is not configured"


class UpstreamStreamError(GatewayError):
    """Raised when the upstream body fails mid-stream; aborts the outgoing stream."""
    message = "Upstream stream interrupted"


def raise_for_upstream_status(status_code: int, body: str = "") -> None:
    """
    Maps a non-2xx provider status onto the gateway taxonomy.

    Args:
        status_code: HTTP status returned by the provider.
        body: Raw provider error body, logged only.

    Raises:
        UpstreamRateLimited: for 429.
        UpstreamQuotaExhausted: for 402.
        UpstreamGenericFailure: for any other non-2xx status.
    """
    if 200 <= status_code < 300:
        return
    if status_code == 429:
        logging.warning(f"AI rate limited: {body}")
        raise UpstreamRateLimited()
    if status_code == 402:
        logging.warning(f"AI credits exhausted: {body}")
        raise UpstreamQuotaExhausted()
    logging.error(f"AI error: {status_code} {body}")
    raise UpstreamGenericFailure()
