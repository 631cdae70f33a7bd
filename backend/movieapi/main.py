import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from movieapi.routers import auth, comments, health
from movieapi.core.config import get_settings
from movieapi.db import Base, engine
from movieapi import models  # ensure models are imported

# Fails fast when the JWT signing configuration is missing
settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Movie Comments API",
    description="User accounts and per-movie comments for the movie browsing app",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )

app.include_router(health.router)
app.include_router(auth.router, prefix="/api")
app.include_router(comments.router, prefix="/api")

@app.on_event("startup")
async def init_db():
    # Idempotent table creation for first deploys
    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating database tables")
        Base.metadata.create_all(bind=engine)
