from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from resume_optimizer.routers import analyses, jobs, optimized, pipeline, profile, resumes
from resume_optimizer.utils.logging_config import configure_for_environment, get_logger
from resume_optimizer.middleware.error_handlers import RequestContextMiddleware

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("Resume Optimizer API starting up...")

    try:
        from resume_optimizer.services.db import init_indexes
        await init_indexes()
    except Exception as e:
        logger.warning(f"Database index initialization had issues: {e}")
        logger.info("Application will continue - some operations may be slower without indexes")

    from resume_optimizer.services.strategies import get_strategy
    logger.info(f"Extraction strategy: {get_strategy().name}")
    logger.info("Resume Optimizer API startup completed")

    yield

    logger.info("Resume Optimizer API shutting down...")


app = FastAPI(title="Resume Optimizer API", version=API_VERSION, lifespan=lifespan)

app.add_middleware(RequestContextMiddleware, slow_request_threshold=10.0)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
@app.head("/")
async def root():
    """Root endpoint - handles both GET and HEAD requests for health checks"""
    return {"message": "Welcome to the Resume Optimizer API", "version": API_VERSION, "status": "ok"}


@app.get("/health")
@app.head("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}


app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
app.include_router(analyses.router, prefix="/api/analyses", tags=["analyses"])
app.include_router(optimized.router, prefix="/api/optimized", tags=["optimized"])
app.include_router(pipeline.router, prefix="/api", tags=["pipeline"])

logger.info("Resume Optimizer API initialized successfully")
