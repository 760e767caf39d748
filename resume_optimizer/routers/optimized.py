import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from typing import List

from resume_optimizer.models.models import CompatibilityAssessment
from resume_optimizer.models.requests import GenerateOptimizedRequest
from resume_optimizer.models.schemas import OptimizedResumeRecord
from resume_optimizer.routers.dependencies import get_repositories, get_strategy, get_user_id
from resume_optimizer.services.profile_extractor import extract_resume_profile
from resume_optimizer.utils.exceptions import NotFoundError
from resume_optimizer.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger("routers.optimized")


async def _get_optimized(repos, user_id: str, optimized_id: str) -> OptimizedResumeRecord:
    optimized = await repos.optimized.get_by_id(user_id, optimized_id)
    if not optimized:
        raise NotFoundError("Optimized resume not found", resource="optimized_resume", resource_id=optimized_id)
    return optimized


@router.post("", response_model=OptimizedResumeRecord)
async def generate_optimized(
    req: GenerateOptimizedRequest,
    user_id: str = Depends(get_user_id),
    repos=Depends(get_repositories),
    strategy=Depends(get_strategy),
):
    """Rewrite the analysed resume for its job"""
    analysis = await repos.analyses.get_by_id(user_id, req.analysis_id)
    if not analysis:
        raise NotFoundError("Analysis not found", resource="analysis", resource_id=req.analysis_id)
    job = await repos.jobs.get_by_id(user_id, analysis.job_id)
    if not job:
        raise NotFoundError("Job not found", resource="job", resource_id=analysis.job_id)
    resume = await repos.resumes.get_by_id(user_id, analysis.resume_id)
    if not resume:
        raise NotFoundError("Resume not found", resource="resume", resource_id=analysis.resume_id)

    profile = await repos.profiles.get_for_user(user_id)
    if profile is None:
        # no stored profile yet: read what we can from this resume
        profile = extract_resume_profile(resume.extracted_text)

    assessment = CompatibilityAssessment(
        score=analysis.compatibility_score,
        strengths=analysis.strengths,
        weaknesses=analysis.weaknesses,
        improvements=analysis.improvements,
        matched_skills=analysis.matched_skills,
        missing_skills=analysis.missing_skills,
    )
    loop = asyncio.get_running_loop()
    content = await loop.run_in_executor(None, strategy.rewrite_resume, profile, job, assessment)

    record = OptimizedResumeRecord(
        user_id=user_id,
        original_resume_id=resume.resume_id,
        job_id=job.job_id,
        analysis_id=analysis.analysis_id,
        content=content,
        improvements=analysis.improvements,
    )
    await repos.optimized.save(record)
    logger.info(f"Stored optimized resume {record.optimized_id} for analysis {analysis.analysis_id}")
    return record


@router.get("", response_model=List[OptimizedResumeRecord])
async def list_optimized(user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    return await repos.optimized.get_all(user_id)


@router.get("/{optimized_id}", response_model=OptimizedResumeRecord)
async def get_optimized(optimized_id: str, user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    return await _get_optimized(repos, user_id, optimized_id)


@router.get("/{optimized_id}/download", response_class=PlainTextResponse)
async def download_optimized(optimized_id: str, user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    """Plain-text download of an optimized resume"""
    optimized = await _get_optimized(repos, user_id, optimized_id)
    return PlainTextResponse(
        optimized.content,
        headers={"Content-Disposition": f'attachment; filename="curriculo-otimizado-{optimized_id}.txt"'},
    )
