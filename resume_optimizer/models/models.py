from pydantic import BaseModel, Field
from typing import List, Optional, Literal

Seniority = Literal["junior", "pleno", "senior", "especialista"]
WorkModel = Literal["presencial", "hibrido", "remoto"]

DEFAULT_JOB_TITLE = "Vaga de Emprego"
DEFAULT_COMPANY = "Empresa"


class JobPosting(BaseModel):
    title: str = DEFAULT_JOB_TITLE
    company: str = DEFAULT_COMPANY
    description: str = ""
    summary: str = ""
    requirements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    seniority: Optional[Seniority] = None
    work_model: Optional[WorkModel] = None
    url: Optional[str] = None
    # Only the remote extractor fills these
    area: Optional[str] = None
    location: Optional[str] = None
    contract_type: Optional[str] = None
    salary_range: Optional[str] = None
    experience_requirement: Optional[str] = None
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)


class JobConfidence(BaseModel):
    score: float
    missing_fields: List[str] = Field(default_factory=list)


class ResumeProfile(BaseModel):
    """Personal and professional data found in a resume; None means not found."""
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    projects: Optional[List[str]] = None


class CompatibilityAssessment(BaseModel):
    score: int = Field(ge=0, le=100)
    strengths: List[str]
    weaknesses: List[str]
    improvements: List[str]
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
