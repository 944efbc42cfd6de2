# This file makes the 'agents' directory a Python package,
# allowing for clean imports of the agent classes.
from types import MappingProxyType

from ..core.models import Action
from .base_agent import BaseCareerAgent
from .career_coach_agent import CareerCoachAgent
from .resume_analysis_agent import ResumeAnalysisAgent
from .bullet_enhancement_agent import BulletEnhancementAgent
from .cover_letter_agent import CoverLetterAgent

AGENTS = MappingProxyType({
    Action.CHAT: CareerCoachAgent,
    Action.ANALYZE: ResumeAnalysisAgent,
    Action.ENHANCE: BulletEnhancementAgent,
    Action.COVER_LETTER: CoverLetterAgent,
})


def get_agent(action: Action, gemini_client) -> BaseCareerAgent:
    return AGENTS[action](gemini_client)


__all__ = [
    "AGENTS",
    "BaseCareerAgent",
    "CareerCoachAgent",
    "ResumeAnalysisAgent",
    "BulletEnhancementAgent",
    "CoverLetterAgent",
    "get_agent",
]
