import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from streamhub.routers import health, content, channels, music
from streamhub.core.config import get_settings
from streamhub.db import Base, engine
from streamhub import models  # ensure models are imported

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="StreamHub Catalog API",
    description="Content discovery: trending, featured, new, search, related, shorts, live channels, playlists and artists",
    version="1.0.0"
)

# CORS middleware yapılandırması
origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Every error leaves the API as {"success": false, "message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("query", "path", "header"))
        message = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": message},
    )


app.include_router(health.router)
app.include_router(content.router)
app.include_router(channels.router)
app.include_router(music.router)


@app.on_event("startup")
async def init_db():
    # İlk deploy için otomatik tablo oluşturma (idempotent)
    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating catalog tables")
        Base.metadata.create_all(bind=engine)
