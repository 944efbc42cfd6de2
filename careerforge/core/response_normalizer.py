import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from .models import ContentResponse, StructuredAnalysisResult

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def analysis_fallback() -> Dict[str, Any]:
    """A valid but degraded analysis, returned when the model's output cannot be used."""
    return {
        "overall_score": 0,
        "formatting_score": 0,
        "keyword_score": 0,
        "structure_score": 0,
        "content_score": 0,
        "issues": [
            {
                "title": "Analysis Failure",
                "description": "The AI response could not be parsed into an ATS analysis.",
                "severity": "warning",
            }
        ],
        "recommended_keywords": [],
        "suggestions": ["Please try running the analysis again."],
    }


def normalize_analysis(response_text: str) -> Dict[str, Any]:
    """
    Parses the analyze action's output against `StructuredAnalysisResult`.

    A payload that validates is returned exactly as the model produced it.
    Anything else yields `analysis_fallback()`; this function never raises.
    """
    clean_response = _CODE_FENCE.sub("", (response_text or "").strip())
    try:
        payload = json.loads(clean_response)
        StructuredAnalysisResult.model_validate(payload)
    except json.JSONDecodeError:
        logging.warning("Failed to decode JSON from the analysis response; returning fallback result.")
        logging.debug(f"Raw response was: {response_text}")
        return analysis_fallback()
    except ValidationError as e:
        logging.warning(f"Analysis response did not match the expected schema: {e.error_count()} error(s)")
        return analysis_fallback()
    return payload


def normalize_content(response_text: str) -> Dict[str, str]:
    """Wraps plain generated text for the enhance and cover-letter actions."""
    return ContentResponse(content=response_text or "").model_dump()
