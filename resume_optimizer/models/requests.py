from pydantic import BaseModel, validator
from typing import Optional

# Request bodies accepted by the API routers


class ParseJobRequest(BaseModel):
    """Job posting given either as pasted text or as a link"""
    job_text: Optional[str] = None
    url: Optional[str] = None

    @validator('url')
    def blank_url_is_none(cls, v):
        return v.strip() if v and v.strip() else None


class ResumeUploadRequest(BaseModel):
    """Resume file as sent by the upload form"""
    filename: str
    base64_content: str


class ExtractProfileRequest(BaseModel):
    resume_text: str


class AnalyzeCompatibilityRequest(BaseModel):
    job_id: str
    resume_id: str


class GenerateOptimizedRequest(BaseModel):
    analysis_id: str


class OptimizePipelineRequest(BaseModel):
    """One-shot request running the whole pipeline"""
    resume_text: str
    job_text: Optional[str] = None
    url: Optional[str] = None
    file_name: str = "curriculo.txt"
