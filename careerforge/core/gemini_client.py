import logging
from typing import Any

import requests
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .config import Settings
from .errors import UpstreamGenericFailure, UpstreamMisconfigured, raise_for_upstream_status
from .models import UpstreamRequest


class GeminiClient:
    """
    Client for the Google Gemini API covering both response modes the gateway needs.

    Single-shot calls go through the Google GenAI SDK. Streaming calls use a raw
    `streamGenerateContent` request so the gateway can transcode the body itself.
    Each method issues exactly one upstream call; there is no retry layer.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
    ):
        """
        Args:
            api_key: The Google AI API key.
            model_name: The Gemini model to use (e.g., "gemini-2.5-pro").
            api_base: Base URL of the Generative Language REST API.
            timeout: Upstream call timeout in seconds, applied to both modes.
        """
        if not api_key:
            raise ValueError("API key for Gemini client cannot be None or empty.")

        self.api_key = api_key
        self.model_name = model_name
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )
        logging.info(f"GeminiClient initialized with model: {self.model_name}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        """
        Raises:
            UpstreamMisconfigured: If no API key is configured.
        """
        if not settings.upstream_configured:
            raise UpstreamMisconfigured()
        return cls(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            api_base=settings.gemini_api_base,
            timeout=settings.upstream_timeout_seconds,
        )

    def generate_text(self, request: UpstreamRequest) -> str:
        """
        Runs a single-shot generation and returns the response text.

        When the request carries a response schema the model is constrained to
        JSON matching it.

        Raises:
            UpstreamRateLimited, UpstreamQuotaExhausted, UpstreamGenericFailure:
                If the provider rejects the call.
        """
        config_kwargs = {
            "system_instruction": request.system_instruction,
            "temperature": request.temperature,
        }
        if request.response_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = request.response_schema
        config = types.GenerateContentConfig(**config_kwargs)

        logging.info(f"Sending request to Gemini API (model={self.model_name}, stream=False)")
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=request.contents,
                config=config,
            )
        except genai_errors.APIError as e:
            raise_for_upstream_status(e.code or 500, e.message or "")
            raise
        except Exception as e:
            logging.error(f"An error occurred calling Gemini: {e}", exc_info=True)
            raise UpstreamGenericFailure() from e

        if not response.text:
            logging.warning("Gemini API returned an empty or blocked response.")
            return ""
        return response.text

    def stream_url(self) -> str:
        return f"{self.api_base}/models/{self.model_name}:streamGenerateContent"

    def open_stream(self, request: UpstreamRequest) -> Any:
        """
        Opens a streaming generation and returns the live `requests` response.

        The body is not read here; the caller owns the response and must close it.
        Gemini is asked for SSE framing so every streamed object sits on one line.

        Raises:
            UpstreamRateLimited, UpstreamQuotaExhausted, UpstreamGenericFailure:
                If the provider rejects the call or cannot be reached.
        """
        logging.info(f"Sending request to Gemini API (model={self.model_name}, stream=True)")
        try:
            response = requests.post(
                self.stream_url(),
                params={"alt": "sse"},
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=request.to_rest_body(),
                stream=True,
                timeout=(10, self.timeout),
            )
        except requests.exceptions.RequestException as e:
            logging.error(f"Could not reach Gemini streaming endpoint: {e}")
            raise UpstreamGenericFailure() from e

        if not response.ok:
            try:
                body = response.text
            finally:
                response.close()
            raise_for_upstream_status(response.status_code, body)
        return response
