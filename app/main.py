import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# ✅ Import All API Routes
from app.api.routes import jobs, deleted_posts, companies, deleted_companies, applications, health
from app.core import config
from app.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)

    if config.RUN_MIGRATIONS:
        from app.db.migrate import run_migrations
        run_migrations()
    else:
        from app.db.init_db import init_db
        init_db()

    logger.info("JobPortal API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="JobPortal API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Accept", "user-id"],
)


# ============================================
# ✅ JSON ERROR BODIES
# ============================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {error, message} so clients can read either key."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": str(exc.detail), "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(jobs.router)
app.include_router(deleted_posts.router)
app.include_router(companies.router)
app.include_router(deleted_companies.router)
app.include_router(applications.router)
