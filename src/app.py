# ============================================================
# Distillery Chat FastAPI App
# ------------------------------------------------------------
# This app wires everything together:
#   - POST /chat: history + message -> tool-augmented generation
#   - OPTIONS /chat: pre-flight, empty body
#   - Permissive CORS headers on every response
#   - Anthropic (web search) or Echo client, built once at startup
# ============================================================

import logging
import sys

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List, Optional, Dict, Any

# --- Local imports ---
from src.settings import settings
from src.generate import ChatGenerator, Message, ChatResponse
from src.generate.clients.echo_dev_client import EchoDevClient

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# 🔧 Model client selection (process-wide, read-only after startup)
# ------------------------------------------------------------
if settings.ANTHROPIC_API_KEY:
    from src.generate.clients.anthropic_client import AnthropicClient
    model_client = AnthropicClient(model=settings.ANTHROPIC_MODEL, api_key=settings.ANTHROPIC_API_KEY)
else:
    logger.warning("ANTHROPIC_API_KEY is not set; using the echo dev client")
    model_client = EchoDevClient()

chat_gen = ChatGenerator(model_client=model_client, config_path=settings.GENERATE_CONFIG)


def get_chat_generator() -> ChatGenerator:
    return chat_gen


# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="Distillery Chat API", version="0.1")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"}, headers=exc.headers)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected chat request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class ChatTurn(BaseModel):
    role: Optional[str] = None
    content: str

class ChatRequest(BaseModel):
    message: Optional[str] = None
    history: Optional[List[ChatTurn]] = None

class ChatPayload(BaseModel):
    message: str
    usage: Dict[str, Any]
    searchesUsed: int

# ------------------------------------------------------------
# 💬 Main chat route
# ------------------------------------------------------------
@app.options("/chat")
def chat_preflight():
    return Response(status_code=200)


@app.post("/chat", response_model=ChatPayload)
def chat(
    req: Optional[ChatRequest] = Body(default=None),
    generator: ChatGenerator = Depends(get_chat_generator),
):
    if req is None or not req.message:
        return JSONResponse(status_code=400, content={"error": "Message is required"})

    history = [Message(role=h.role, content=h.content) for h in (req.history or [])]

    try:
        out: ChatResponse = generator.chat(user_message=req.message, history=history)
    except Exception as e:
        logger.exception("Chat API error")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process chat request", "details": str(e)},
        )

    logger.debug("chat ok: searches_used=%d sources=%d", out.searches_used, len(out.sources))
    return ChatPayload(message=out.text, usage=out.usage, searchesUsed=out.searches_used)

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.app_name,
        "engine": type(model_client).__name__,
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

@app.get("/")
def hello():
    return {"message": f"{settings.app_name} service running."}
