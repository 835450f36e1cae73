from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from app.database import Base, engine
from app.routes import auth, directors, actors, movies
from app.middleware.security import SecurityHeadersMiddleware, request_logging_middleware
from app import models  # noqa: F401  (register every table on Base.metadata)
import os
import logging

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events

    Startup:
    - Create missing tables (unless AUTO_CREATE_TABLES=false)
    - Log configuration
    """
    logger.info("=" * 60)
    logger.info("Movie Catalog API Starting...")
    logger.info(f"   Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"   CORS Origins: {len(allowed_origins)} configured")
    logger.info("=" * 60)

    if os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true":
        try:
            Base.metadata.create_all(bind=engine)
        except Exception as e:
            logger.error(f"Failed to create tables: {str(e)}")
            raise

    yield

    logger.info("Movie Catalog API Shutting Down...")


app = FastAPI(
    title="Movie Catalog API",
    description="Catalog of movies, directors and actors with per-user ownership",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ============================================
# Security Configuration
# ============================================

# CORS - Whitelist allowed origins
allowed_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
]
if production_url := os.getenv("FRONTEND_URL"):
    allowed_origins.append(production_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.middleware("http")(request_logging_middleware)

# Trusted Hosts - Production only
if os.getenv("ENVIRONMENT") == "production":
    if trusted_hosts := [h.strip() for h in os.getenv("TRUSTED_HOSTS", "").split(",") if h.strip()]:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)


# ============================================
# Exception Handlers - keep CORS headers on every error response
# ============================================

def _with_cors(request: Request, response: JSONResponse) -> JSONResponse:
    origin = request.headers.get("origin")
    if origin in allowed_origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
    return response


def format_validation_errors(errors) -> str:
    """Flatten pydantic errors into 'field: message; field: message'"""
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields are reported as 400 with a readable message"""
    message = format_validation_errors(exc.errors())
    logger.info(f"Validation failed for {request.method} {request.url.path}: {message}")
    return _with_cors(request, JSONResponse(status_code=400, content={"detail": message}))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _with_cors(
        request,
        JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all handler, logged with traceback"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return _with_cors(request, JSONResponse(status_code=500, content={"detail": "Internal server error"}))


# ============================================
# Routes
# ============================================

@app.get("/", tags=["Health"])
async def root():
    """Basic health check"""
    return {
        "message": "Movie Catalog API",
        "version": API_VERSION,
        "status": "healthy",
        "docs": "/docs"
    }

@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check for monitoring"""
    from datetime import datetime, timezone
    return {
        "status": "healthy",
        "api_version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

app.include_router(auth.router)
app.include_router(directors.router)
app.include_router(actors.router)
app.include_router(movies.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        log_level="info"
    )
