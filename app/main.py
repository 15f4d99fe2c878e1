# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import AppError
from app.core.json import UTF8JSONResponse, error_response
from app.db.init_db import init_models
from app.media.storage import ensure_media_dirs

# routers
from app.users.router import router as users_router
from app.feed.router import router as feed_router
from app.comments.router import router as comments_router
from app.follows.router import router as follows_router
from app.search.router import router as search_router
from app.counts.router import router as counts_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("Iniciando BuzzNest API…")
    await init_models()
    log.info("Startup listo.")
    yield
    log.info("Apagando BuzzNest API.")


app = FastAPI(
    title="BuzzNest API",
    default_response_class=UTF8JSONResponse,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# host de media local: /media/posts/...
ensure_media_dirs()
app.mount("/media", StaticFiles(directory=settings.MEDIA_DIR, html=False), name="media")


@app.middleware("http")
async def cache_static_media(request: Request, call_next):
    """
    Cache fuerte para /media/posts (nombres uuid, nunca se reescriben).
    """
    response = await call_next(request)
    if request.url.path.startswith("/media/posts/"):
        response.headers["Cache-Control"] = "public, max-age=31536000, immutable"
    return response


# -------------------------
# errores → {"message": ...}
# -------------------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # body/params mal formados → 400 (no 422) con el detalle de pydantic
    errors = jsonable_encoder(exc.errors(), exclude={"ctx", "url"})
    return error_response(400, "Invalid request", errors=errors)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    log.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(409, "Resource already exists")


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "An unexpected error occurred")


@app.get("/api/health/")
async def health():
    return {"ok": True, "service": "buzznest"}


# routers
app.include_router(users_router)     # /signup /login /profile
app.include_router(feed_router)      # /upload /posts /update /delete /post/{id}/like-unlike
app.include_router(comments_router)  # /comment /comments/{id} /getcomments
app.include_router(follows_router)   # /follow/{id} /followers-following/{id}
app.include_router(search_router)    # /search
app.include_router(counts_router)    # /post-count
