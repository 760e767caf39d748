# models/response.py
from pydantic import BaseModel
from typing import Optional

from resume_optimizer.models.models import CompatibilityAssessment, ResumeProfile
from resume_optimizer.models.schemas import (
    AnalysisRecord,
    JobRecord,
    OptimizedResumeRecord,
    ResumeRecord,
)


class ProfileExtractionResponse(BaseModel):
    profile: Optional[ResumeProfile] = None
    stored: bool = False
    placeholder_detected: bool = False


class PipelineResponse(BaseModel):
    job: JobRecord
    resume: ResumeRecord
    profile: Optional[ResumeProfile] = None
    assessment: CompatibilityAssessment
    analysis: AnalysisRecord
    optimized: OptimizedResumeRecord
