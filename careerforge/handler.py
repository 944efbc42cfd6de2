# handler.py
import json
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from .core.auth import get_current_user
from .core.config import Settings, get_settings
from .core.errors import GatewayError
from .core.models import AIRequest, User
from .gateway import AIGateway, get_gateway

# --- Configuration ---
settings = get_settings()
logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')

CORS_ALLOW_HEADERS = [
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
    "x-supabase-client-platform",
    "x-supabase-client-platform-version",
    "x-supabase-client-runtime",
    "x-supabase-client-runtime-version",
]


# --- FastAPI App Initialization ---
app = FastAPI(
    title="CareerForge AI Gateway",
    description="""
    AI gateway for the CareerForge resume and career tools.

    Available Endpoints:
    - GET /: Public endpoint
    - GET /health: Health check endpoint
    - POST /ai-career: Chat coach (SSE), ATS analysis, bullet enhancement and
      cover letters (requires a Firebase ID token)
    """,
    version="1.0.0",
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse({"error": str(exc)}, status_code=500)


# --- API Endpoints ---

@app.get("/")
def read_root():
    """Publicly accessible endpoint."""
    return {"message": "Hello from the CareerForge AI gateway! This is a public endpoint."}


@app.get("/favicon.ico")
async def favicon():
    return Response(status_code=204)


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {"message": "Health OK", "upstream_configured": settings.upstream_configured}


@app.options("/ai-career")
async def ai_career_options():
    return Response(status_code=200)


@app.post("/ai-career")
async def ai_career(
    request: Request,
    current_user: User = Depends(get_current_user),
    gateway: AIGateway = Depends(get_gateway),
):
    """
    Single entry point for every AI action.

    Body: `{action?, messages?, resumeData?, jobData?}`. `action` selects the
    prompt and the response mode; chat streams SSE deltas, the other actions
    return JSON. Authentication runs first, so unauthenticated callers never
    reach the credit ledger or the upstream model.
    """
    try:
        payload = json.loads(await request.body() or b"{}")
        if not isinstance(payload, dict):
            raise ValueError("Request body must be a JSON object")
        ai_request = AIRequest.model_validate(payload)
        return await run_in_threadpool(gateway.handle, ai_request, current_user)
    except GatewayError:
        raise
    except Exception as e:
        logging.error(f"ai-career error: {e}", exc_info=True)
        raise GatewayError(str(e)) from e

# To run this app:
# 1. Install the package: pip install -e .
# 2. Set GEMINI_API_KEY (optional), FIREBASE_CREDENTIALS and CREDIT_RPC_URL.
# 3. Run the server: uvicorn careerforge.handler:app --reload
