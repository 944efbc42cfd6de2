from typing import Dict

from ..core.models import Action, AIRequest
from ..core.response_normalizer import normalize_content
from .base_agent import BaseCareerAgent


class CoverLetterAgent(BaseCareerAgent):
    action = Action.COVER_LETTER
    temperature = 0.8

    def run(self, request: AIRequest) -> Dict[str, str]:
        return normalize_content(self.llm.generate_text(self.build_request(request)))
