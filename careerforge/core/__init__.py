"""
Core module for the CareerForge AI gateway.

This package contains the non-agent building blocks of the gateway: settings,
the error taxonomy, request/response models, the Gemini client and its mock
stand-in, authentication, credit metering, the stream transcoder and the
response normalizer.
"""

from .config import Settings, get_settings
from .credit_ledger import CreditLedger
from .gemini_client import GeminiClient
from .mock_client import MockGeminiClient
from .stream_transcoder import StreamTranscoder

__all__ = [
    "Settings",
    "get_settings",
    "CreditLedger",
    "GeminiClient",
    "MockGeminiClient",
    "StreamTranscoder",
]
