"""
Static prompt material for the gateway's four actions.

Both tables are read-only mappings built at import time and never mutated.
"""
from types import MappingProxyType

SYSTEM_PROMPTS = MappingProxyType({
    "chat": """You are CareerForge AI, an expert career coach and resume advisor. You help users with:
- Resume writing and optimization
- Career advice and job search strategies
- Interview preparation
- Skill development recommendations
- Industry insights
Be concise, actionable, and encouraging. Use markdown formatting.""",

    "analyze": """You are an expert ATS (Applicant Tracking System) resume analyzer. Analyze the provided resume and evaluate:
- Overall ATS compatibility score (0-100)
- Formatting score, keyword score, structure score, content score (each 0-100)
- List of specific issues found with severity (critical/warning/info)
- Recommended keywords to add
- Actionable improvement suggestions
Be thorough and specific.
Return only valid JSON matching this structure, with no additional text or markdown:
{"overall_score": number, "formatting_score": number, "keyword_score": number, "structure_score": number, "content_score": number,
 "issues": [{"title": string, "description": string, "severity": "critical" | "warning" | "info"}],
 "recommended_keywords": [string], "suggestions": [string]}""",

    "enhance": """You are an expert resume writer. Given a resume bullet point or section, rewrite it to be more impactful, using action verbs, quantifiable achievements, and ATS-friendly language. Return 3 enhanced versions.""",

    "cover-letter": """You are an expert cover letter writer. Given a resume summary and job details, write a compelling, personalized cover letter. Be professional, specific, and highlight relevant experience. Use a warm but professional tone. Format with proper paragraphs.""",
})

_SCORE = {"type": "NUMBER", "minimum": 0, "maximum": 100}

# Gemini response schema (OpenAPI subset) for the analyze action.
ANALYSIS_RESPONSE_SCHEMA = MappingProxyType({
    "type": "OBJECT",
    "properties": {
        "overall_score": dict(_SCORE, description="Overall ATS score 0-100"),
        "formatting_score": dict(_SCORE),
        "keyword_score": dict(_SCORE),
        "structure_score": dict(_SCORE),
        "content_score": dict(_SCORE),
        "issues": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "severity": {"type": "STRING", "enum": ["critical", "warning", "info"]},
                },
                "required": ["title", "description", "severity"],
            },
        },
        "recommended_keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        "suggestions": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "overall_score", "formatting_score", "keyword_score", "structure_score",
        "content_score", "issues", "recommended_keywords", "suggestions",
    ],
})
