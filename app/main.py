"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.database import init_db
from app.dependencies import (
    get_analytics_service,
    get_department_agent_service,
    get_department_service,
)
from app.logging_config import setup_logging, get_logger
from app.routers import agents, districts, observability
from app.seed_data import seed_demo_agents

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting SmartCity agents API...")
    if settings.analytics_persist_enabled:
        await init_db()
        logger.info("Database initialized")

    # Subscribe the agent service before any department traffic
    get_department_agent_service()
    if settings.seed_demo_agents:
        seeded = await seed_demo_agents(get_department_service())
        logger.info(f"Seeded {seeded} demo department agents")
    yield
    # Shutdown
    await get_analytics_service().flush()
    logger.info("Shutting down SmartCity agents API...")


settings = get_settings()

app = FastAPI(
    title="SmartCity Agents",
    description="Simulated smart city services - district metrics and department agent assignment",
    version="0.1.0",
    lifespan=lifespan,
)

# Request timing middleware
@app.middleware("http")
async def log_request_timing(request: Request, call_next):
    """Log the time taken for each API request."""
    start_time = time.time()

    logger.info(f"→ API_REQUEST | {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time

    status_emoji = "✓" if response.status_code < 400 else "✗"
    logger.info(
        f"{status_emoji} API_RESPONSE | {request.method} {request.url.path} | "
        f"status={response.status_code} | duration={duration:.3f}s"
    )

    return response

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(districts.router, tags=["Districts"])
app.include_router(observability.router, prefix="/v1", tags=["Observability"])
app.include_router(agents.router, prefix="/v1", tags=["Department Agents"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SmartCity Agents",
        "version": "0.1.0",
        "description": "Simulated smart city services",
    }
