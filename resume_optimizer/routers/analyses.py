import asyncio

from fastapi import APIRouter, Depends
from typing import List

from resume_optimizer.models.models import CompatibilityAssessment
from resume_optimizer.models.requests import AnalyzeCompatibilityRequest
from resume_optimizer.models.schemas import AnalysisRecord
from resume_optimizer.routers.dependencies import get_repositories, get_strategy, get_user_id
from resume_optimizer.utils.exceptions import NotFoundError
from resume_optimizer.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger("routers.analyses")


def make_analysis_record(assessment: CompatibilityAssessment, user_id: str, job_id: str, resume_id: str) -> AnalysisRecord:
    return AnalysisRecord(
        user_id=user_id,
        job_id=job_id,
        resume_id=resume_id,
        compatibility_score=assessment.score,
        strengths=assessment.strengths,
        weaknesses=assessment.weaknesses,
        improvements=assessment.improvements,
        matched_skills=assessment.matched_skills,
        missing_skills=assessment.missing_skills,
    )


@router.post("", response_model=AnalysisRecord)
async def analyze_compatibility(
    req: AnalyzeCompatibilityRequest,
    user_id: str = Depends(get_user_id),
    repos=Depends(get_repositories),
    strategy=Depends(get_strategy),
):
    """Score a stored resume against a stored job"""
    job = await repos.jobs.get_by_id(user_id, req.job_id)
    if not job:
        raise NotFoundError("Job not found", resource="job", resource_id=req.job_id)
    resume = await repos.resumes.get_by_id(user_id, req.resume_id)
    if not resume:
        raise NotFoundError("Resume not found", resource="resume", resource_id=req.resume_id)

    loop = asyncio.get_running_loop()
    assessment = await loop.run_in_executor(None, strategy.score_compatibility, resume.extracted_text, job)
    record = make_analysis_record(assessment, user_id, job.job_id, resume.resume_id)
    await repos.analyses.save(record)
    logger.info(f"Analysis {record.analysis_id}: job {job.job_id} x resume {resume.resume_id} = {assessment.score}")
    return record


@router.get("", response_model=List[AnalysisRecord])
async def list_analyses(user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    return await repos.analyses.get_all(user_id)


@router.get("/{analysis_id}", response_model=AnalysisRecord)
async def get_analysis(analysis_id: str, user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    analysis = await repos.analyses.get_by_id(user_id, analysis_id)
    if not analysis:
        raise NotFoundError("Analysis not found", resource="analysis", resource_id=analysis_id)
    return analysis
