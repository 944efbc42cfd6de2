from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, field_validator


class Action(str, Enum):
    """The four request modes the gateway supports."""
    CHAT = "chat"
    ANALYZE = "analyze"
    ENHANCE = "enhance"
    COVER_LETTER = "cover-letter"

    @property
    def streams(self) -> bool:
        return self is Action.CHAT

    @classmethod
    def parse(cls, value: Any) -> "Action":
        """Unknown or missing actions are served with the chat prompt."""
        try:
            return cls(value)
        except ValueError:
            return cls.CHAT


class ConversationMessage(BaseModel):
    role: str = "user"
    content: str = ""

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        if value not in ("user", "assistant"):
            raise ValueError(f"Unsupported message role: {value}")
        return value


class AIRequest(BaseModel):
    """Request body accepted by the gateway; field names match the web client."""
    action: Action = Action.CHAT
    messages: List[ConversationMessage] = []
    resumeData: Optional[Any] = None
    jobData: Optional[Any] = None

    @field_validator("action", mode="before")
    @classmethod
    def _fallback_action(cls, value: Any) -> Action:
        return Action.parse(value if value is not None else Action.CHAT.value)

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages(cls, value: Any) -> Any:
        return value if value is not None else []


class User(BaseModel):
    """Pydantic model to represent user data from a Firebase token."""
    uid: str
    email: Optional[str] = None


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


# Ints and floats only; numeric strings and booleans are rejected. The normalizer
# returns the raw payload, so ints stay ints.
Score = StrictFloat


class AnalysisIssue(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: str
    severity: Severity


class StructuredAnalysisResult(BaseModel):
    """ATS analysis returned by the analyze action; the UI renders this shape as-is."""
    model_config = ConfigDict(extra="forbid")

    overall_score: Score = Field(ge=0, le=100)
    formatting_score: Score = Field(ge=0, le=100)
    keyword_score: Score = Field(ge=0, le=100)
    structure_score: Score = Field(ge=0, le=100)
    content_score: Score = Field(ge=0, le=100)
    issues: List[AnalysisIssue]
    recommended_keywords: List[str]
    suggestions: List[str]


class ContentResponse(BaseModel):
    content: str


class UpstreamRequest(BaseModel):
    """A fully assembled Gemini request: system instruction, turns and generation settings."""
    system_instruction: str
    contents: List[Dict[str, Any]]
    temperature: float
    response_schema: Optional[Dict[str, Any]] = None
    stream: bool = False

    def generation_config(self) -> Dict[str, Any]:
        """Generation settings in the REST API's camelCase vocabulary."""
        config: Dict[str, Any] = {"temperature": self.temperature}
        if self.response_schema is not None:
            config["responseMimeType"] = "application/json"
            config["responseSchema"] = self.response_schema
        return config

    def to_rest_body(self) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": self.contents,
            "generationConfig": self.generation_config(),
        }
