from typing import Dict

from ..core.models import Action, AIRequest
from ..core.response_normalizer import normalize_content
from .base_agent import BaseCareerAgent


class BulletEnhancementAgent(BaseCareerAgent):
    """Rewrites a resume bullet or section into three stronger versions."""

    action = Action.ENHANCE
    temperature = 0.7

    def run(self, request: AIRequest) -> Dict[str, str]:
        return normalize_content(self.llm.generate_text(self.build_request(request)))
