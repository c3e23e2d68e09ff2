# Backend/app/main.py
from __future__ import annotations

# --- ensure project root is on sys.path so `api.*`, `app.*` and `services.*` are importable ---
import sys
from pathlib import Path
THIS_FILE = Path(__file__).resolve()
BACKEND_ROOT = THIS_FILE.parents[1]  # .../Backend
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
# -------------------------------------------------------------------------

from fastapi import APIRouter, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response as StarletteResponse

from app.config import settings
from app.core.errors import AppError
from app.core.logging import configure_logging, logger
from app.core.request_id import clear_request_id, new_request_id, set_request_id
from services.supabase_service import close_clients

from api.routers.articles import router as articles_router
from api.routers.countries import router as countries_router
from api.routers.lists import router as lists_router
from api.routers.newspapers import router as newspapers_router
from api.routers.refresh import router as refresh_router
from api.routers.rss import router as rss_router

configure_logging(service_name="api", level=settings.LOG_LEVEL)

app = FastAPI(
    title="Newspaper RSS - Backend",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.on_event("shutdown")
async def _shutdown_cleanup() -> None:
    await close_clients()


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("x-request-id") or new_request_id()
        set_request_id(req_id)

        logger.info("request_started", method=request.method, path=str(request.url.path))
        try:
            response: StarletteResponse = await call_next(request)
        except Exception as exc:
            logger.error("request_exception", error=str(exc.__class__.__name__))
            clear_request_id()
            raise
        logger.info("request_ended", status_code=response.status_code)
        response.headers["X-Request-Id"] = req_id
        clear_request_id()
        return response


# CORS first so it is the outermost middleware.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    content = {"detail": exc.message}
    if exc.data:
        content["data"] = exc.data
    if exc.status_code >= 500:
        logger.error("request_failed", status_code=exc.status_code, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# --- Health endpoints ---
@app.get("/")
async def root():
    return {"ok": True, "app": "Newspaper RSS Backend"}

@app.head("/")
async def root_head():
    return Response(status_code=200)

@app.get("/health")
async def health():
    return {"ok": True}


# --- API router ---
api_router = APIRouter(prefix="/api")
api_router.include_router(articles_router)
api_router.include_router(refresh_router)
api_router.include_router(rss_router)
api_router.include_router(countries_router)
api_router.include_router(newspapers_router)
api_router.include_router(lists_router)

app.include_router(api_router)

logger.info("routers_registered", routers=["articles", "refresh", "rss", "countries", "newspapers", "lists"])
