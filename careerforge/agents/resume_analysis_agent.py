import logging
from typing import Any, Dict

from ..core.models import Action, AIRequest
from ..core.response_normalizer import normalize_analysis
from .base_agent import BaseCareerAgent
from .prompts import ANALYSIS_RESPONSE_SCHEMA


class ResumeAnalysisAgent(BaseCareerAgent):
    """
    Scores a resume for ATS compatibility and returns a `StructuredAnalysisResult`.

    The model is constrained to a JSON schema; output that still fails to
    parse or validate is replaced by a degraded result instead of an error.
    """

    action = Action.ANALYZE
    temperature = 0.2
    response_schema = ANALYSIS_RESPONSE_SCHEMA

    def __init__(self, gemini_client):
        super().__init__(gemini_client)
        self.last_response = ""

    def run(self, request: AIRequest) -> Dict[str, Any]:
        response_text = self.llm.generate_text(self.build_request(request))
        self.last_response = response_text
        analysis_result = normalize_analysis(response_text)
        logging.info(f"Resume analysis complete (overall_score={analysis_result.get('overall_score')})")
        return analysis_result
