# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the TaskTracker API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    TaskTrackerException,
    http_exception_handler,
    tasktracker_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, tasks
from app.auth import routes as auth_routes
from core.database import init_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Create missing tables (unless AUTO_CREATE_TABLES is off)
    - Shutdown: Log
    """
    logger.info(f"Starting TaskTracker API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if settings.AUTO_CREATE_TABLES:
        init_db()

    yield

    logger.info("Shutting down TaskTracker API")


# Create FastAPI application
app = FastAPI(
    title="TaskTracker API",
    description="""
## Personal Task Tracking API

Register, log in, and manage your own tasks.

### Authentication

- `POST /auth/register` or `POST /auth/login` returns a short-lived
  **access token** (15 minutes) and sets a long-lived **refresh token**
  (7 days) in an HTTP-only cookie.
- Send the access token as `Authorization: Bearer <token>`.
- When it expires, `POST /auth/refresh` (cookie is sent automatically)
  returns a new access token.
- `POST /auth/logout` revokes the refresh token server-side.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:8000/auth/register \\
  -H "Content-Type: application/json" -c cookies.txt \\
  -d '{"email": "jane@example.com", "password": "secret123", "name": "Jane"}'

# 2. Create a task
curl -X POST http://localhost:8000/tasks \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"title": "Buy groceries"}'

# 3. Mark it done
curl -X PATCH http://localhost:8000/tasks/1/toggle -H "Authorization: Bearer $TOKEN"
```
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Registration, login, token refresh and logout",
        },
        {
            "name": "Tasks",
            "description": "Create and manage your tasks",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - credentials must be allowed for the refresh cookie,
# which rules out a "*" origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(TaskTrackerException, tasktracker_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/auth",
    tags=["Auth"]
)

# Task endpoints
app.include_router(
    tasks.router,
    prefix="/tasks",
    tags=["Tasks"]
)

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "TaskTracker API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
