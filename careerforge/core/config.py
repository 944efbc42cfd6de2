import os
import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime configuration for the AI gateway, read from the environment."""
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    upstream_timeout_seconds: float = 60.0
    credit_rpc_url: Optional[str] = None
    credit_rpc_key: Optional[str] = None
    credits_per_request: int = 1
    firebase_credentials: Optional[str] = None
    frontend_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @property
    def upstream_configured(self) -> bool:
        return bool(self.gemini_api_key)


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@lru_cache
def get_settings() -> Settings:
    """
    Loads settings once per process.

    Empty environment values are treated as unset so that a blank
    `GEMINI_API_KEY=` line in a .env file still selects the mock fallback.
    """
    load_dotenv()
    settings = Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL") or "gemini-2.5-flash",
        gemini_api_base=os.getenv("GEMINI_API_BASE") or "https://generativelanguage.googleapis.com/v1beta",
        upstream_timeout_seconds=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS") or 60),
        credit_rpc_url=os.getenv("CREDIT_RPC_URL") or None,
        credit_rpc_key=os.getenv("CREDIT_RPC_KEY") or None,
        credits_per_request=int(os.getenv("CREDITS_PER_REQUEST") or 1),
        firebase_credentials=os.getenv("FIREBASE_CREDENTIALS") or None,
        frontend_origins=_split_origins(os.getenv("FRONTEND_ORIGINS")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
    logging.info(f"Settings loaded (model={settings.gemini_model}, upstream_configured={settings.upstream_configured})")
    return settings
