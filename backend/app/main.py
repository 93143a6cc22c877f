"""
User Registry - FastAPI Application

Public registration with a profile picture, and a cookie-gated dashboard to
list, edit and delete registered users.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.app_logging import configure_logging
from app.core.exceptions import ConfigurationError, ImageHostError
from app.core.session import SessionGateMiddleware
from app.database.connections import close_connections, get_database
from app.database.databases.users_db import create_user_indexes
from app.routers import health, pages, session, upload, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Connect to MongoDB and create indexes

    Shutdown:
    - Close the database connection
    """
    configure_logging()
    logger.info("Starting up User Registry...")

    try:
        db = await get_database()
        await create_user_indexes(db)
        logger.info("Database connected and indexes created")
    except ConfigurationError:
        raise
    except Exception as e:
        # Requests retry the connection on their own
        logger.warning("Database initialization warning: %s", e)

    yield

    logger.info("Shutting down User Registry...")
    await close_connections()
    logger.info("Connections closed")


app = FastAPI(
    title="User Registry API",
    description="""
## User Registry

Register users with a profile picture and manage them from a dashboard.

### Session
A successful registration sets the `registered` cookie. Every page under
`/dashboard` requires it; visitors without it are redirected to `/register`.
`DELETE /api/session` clears it.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionGateMiddleware,
    protected_prefix="/dashboard",
    redirect_to="/register",
)


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Something went wrong! Please try again later."},
    )


@app.exception_handler(ImageHostError)
async def image_host_error_handler(request: Request, exc: ImageHostError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Image upload failed. Please try again later."},
    )


# Include routers
app.include_router(health.router)
app.include_router(session.router)
app.include_router(upload.router)
app.include_router(users.router)
app.include_router(pages.router)
