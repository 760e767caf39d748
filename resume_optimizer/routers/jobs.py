import asyncio

from fastapi import APIRouter, Depends
from typing import List

from resume_optimizer.models.models import JobConfidence, JobPosting
from resume_optimizer.models.requests import ParseJobRequest
from resume_optimizer.models.schemas import JobRecord
from resume_optimizer.models.settings import AppSettings
from resume_optimizer.routers.dependencies import get_repositories, get_settings, get_strategy, get_user_id
from resume_optimizer.services.confidence import score_job_confidence
from resume_optimizer.services.fetcher import fetch_job_text, source_domain
from resume_optimizer.utils.exceptions import NotFoundError, ValidationError
from resume_optimizer.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger("routers.jobs")


def make_job_record(job: JobPosting, confidence: JobConfidence, user_id: str) -> JobRecord:
    return JobRecord(
        **job.dict(),
        user_id=user_id,
        source_domain=source_domain(job.url),
        confidence=confidence.score,
        missing_fields=confidence.missing_fields,
    )


@router.post("/parse", response_model=JobRecord)
async def parse_job(
    req: ParseJobRequest,
    user_id: str = Depends(get_user_id),
    repos=Depends(get_repositories),
    strategy=Depends(get_strategy),
    settings: AppSettings = Depends(get_settings),
):
    """Extract a job posting from a link or pasted text and store it"""
    loop = asyncio.get_running_loop()
    if req.url:
        url, text = await loop.run_in_executor(None, fetch_job_text, req.url, settings.fetch_timeout)
        job = await loop.run_in_executor(None, strategy.extract_job_from_html, text, url)
    elif req.job_text and req.job_text.strip():
        job = await loop.run_in_executor(None, strategy.extract_job_from_text, req.job_text)
    else:
        raise ValidationError("Informe o texto da vaga ou um link", field="job_text")

    confidence = score_job_confidence(job, settings.confidence_weights)
    record = make_job_record(job, confidence, user_id)
    await repos.jobs.save(record)
    logger.info(f"Stored job {record.job_id} for user {user_id} (confidence {confidence.score})")
    return record


@router.get("", response_model=List[JobRecord])
async def list_jobs(user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    """Get all jobs of the caller, newest first"""
    return await repos.jobs.get_all(user_id)


@router.get("/{job_id}", response_model=JobRecord)
async def get_job(job_id: str, user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    job = await repos.jobs.get_by_id(user_id, job_id)
    if not job:
        raise NotFoundError("Job not found", resource="job", resource_id=job_id)
    return job
