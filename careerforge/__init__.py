"""CareerForge AI gateway: authenticated, credit-metered access to Gemini for the CareerForge web app."""

__version__ = "1.0.0"
