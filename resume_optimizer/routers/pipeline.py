import asyncio

from fastapi import APIRouter, Depends

from resume_optimizer.models.requests import OptimizePipelineRequest
from resume_optimizer.models.response import PipelineResponse
from resume_optimizer.models.schemas import OptimizedResumeRecord, ProfileRecord, ResumeRecord
from resume_optimizer.routers.analyses import make_analysis_record
from resume_optimizer.routers.dependencies import get_repositories, get_strategy, get_user_id
from resume_optimizer.routers.jobs import make_job_record
from resume_optimizer.services.graph import run_pipeline
from resume_optimizer.services.profile_extractor import is_profile_incomplete
from resume_optimizer.utils.logging_config import get_logger, log_duration

router = APIRouter()
logger = get_logger("routers.pipeline")


@router.post("/optimize", response_model=PipelineResponse)
async def optimize(
    req: OptimizePipelineRequest,
    user_id: str = Depends(get_user_id),
    repos=Depends(get_repositories),
    strategy=Depends(get_strategy),
):
    """Run job extraction, profile extraction, scoring and rewriting in one call"""
    with log_duration("optimize pipeline", logger, threshold_ms=10000):
        loop = asyncio.get_running_loop()
        state = await loop.run_in_executor(None, run_pipeline, strategy, req.resume_text, req.job_text, req.url)

    job = make_job_record(state["job"], state["confidence"], user_id)
    await repos.jobs.save(job)

    resume = ResumeRecord(user_id=user_id, file_name=req.file_name, extracted_text=req.resume_text)
    await repos.resumes.save(resume)

    profile = state.get("profile")
    if profile is not None and is_profile_incomplete(await repos.profiles.get_for_user(user_id)):
        await repos.profiles.save(ProfileRecord(**profile.dict(), user_id=user_id))

    assessment = state["assessment"]
    analysis = make_analysis_record(assessment, user_id, job.job_id, resume.resume_id)
    await repos.analyses.save(analysis)

    optimized = OptimizedResumeRecord(
        user_id=user_id,
        original_resume_id=resume.resume_id,
        job_id=job.job_id,
        analysis_id=analysis.analysis_id,
        content=state["optimized"],
        improvements=assessment.improvements,
    )
    await repos.optimized.save(optimized)

    return PipelineResponse(
        job=job,
        resume=resume,
        profile=profile,
        assessment=assessment,
        analysis=analysis,
        optimized=optimized,
    )
