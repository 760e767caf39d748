from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import uuid

from resume_optimizer.models.models import JobPosting, ResumeProfile


def new_id() -> str:
    return str(uuid.uuid4())


# -------- Jobs --------
class JobRecord(JobPosting):
    job_id: str = Field(default_factory=new_id)
    user_id: str
    source_domain: Optional[str] = None
    confidence: float = 0.0
    missing_fields: List[str] = []
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------- Resumes --------
class ResumeRecord(BaseModel):
    resume_id: str = Field(default_factory=new_id)
    user_id: str
    file_name: str
    extracted_text: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------- Profiles (one per user) --------
class ProfileRecord(ResumeProfile):
    user_id: str
    updated_at: datetime = Field(default_factory=datetime.utcnow)


# -------- Analyses --------
class AnalysisRecord(BaseModel):
    analysis_id: str = Field(default_factory=new_id)
    user_id: str
    job_id: str
    resume_id: str
    compatibility_score: int
    strengths: List[str] = []
    weaknesses: List[str] = []
    improvements: List[str] = []
    matched_skills: List[str] = []
    missing_skills: List[str] = []
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------- Optimized resumes --------
class OptimizedResumeRecord(BaseModel):
    optimized_id: str = Field(default_factory=new_id)
    user_id: str
    original_resume_id: str
    job_id: str
    analysis_id: Optional[str] = None
    content: str
    improvements: List[str] = []
    created_at: datetime = Field(default_factory=datetime.utcnow)
