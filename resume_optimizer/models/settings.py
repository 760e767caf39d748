"""
Runtime settings for extraction, scoring and the LLM client
"""
import os
from enum import Enum
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, validator

load_dotenv()


class ExtractionPolicy(str, Enum):
    """How the service chooses between the LLM and the local heuristics"""
    REMOTE_WITH_FALLBACK = "remote_with_fallback"
    LOCAL = "local"
    REMOTE = "remote"


class LLMSettings(BaseModel):
    """LLM Configuration Settings"""
    api_key: Optional[str] = Field(default=None, description="Bearer token for the chat-completions API")
    base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible API base URL")
    model_name: str = Field(default="gpt-4o", description="Chat model name")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="Generation temperature")
    max_tokens: int = Field(default=2000, ge=1, description="Maximum tokens to generate")
    timeout: int = Field(default=20, ge=1, le=300, description="Request timeout in seconds")

    @validator('base_url')
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


class ConfidenceWeights(BaseModel):
    """Weights of the job extraction confidence rubric"""
    required: float = Field(default=2.0, ge=0.0, description="Weight of title and company")
    important: float = Field(default=1.0, ge=0.0, description="Weight of seniority, area, responsibilities, experience")
    optional: float = Field(default=0.5, ge=0.0, description="Weight of benefits and technical skills")


class CompatibilityWeights(BaseModel):
    """Resume/job compatibility scoring constants"""
    skill_weight: float = Field(default=0.6, ge=0.0, le=1.0, description="Share of the skill match ratio")
    requirement_weight: float = Field(default=0.4, ge=0.0, le=1.0, description="Share of the requirement match ratio")
    baseline: float = Field(default=50.0, ge=0.0, le=100.0, description="Score when the job has no skills or requirements")
    keyword_bonus: float = Field(default=5.0, ge=0.0, description="Bonus per generic keyword shared by resume and job")

    @validator('requirement_weight')
    def validate_total_weights(cls, v, values):
        total = v + values.get('skill_weight', 0)
        if abs(total - 1.0) > 0.01:
            raise ValueError('skill_weight and requirement_weight must sum to 1.0')
        return v


class AppSettings(BaseModel):
    """Complete service configuration"""
    extraction_policy: ExtractionPolicy = ExtractionPolicy.REMOTE_WITH_FALLBACK
    llm: LLMSettings = Field(default_factory=LLMSettings)
    confidence_weights: ConfidenceWeights = Field(default_factory=ConfidenceWeights)
    compatibility_weights: CompatibilityWeights = Field(default_factory=CompatibilityWeights)
    fetch_timeout: float = Field(default=15.0, gt=0, description="Job page fetch timeout in seconds")
    mongo_details: str = "mongodb://localhost:27017"
    db_name: str = "resume_optimizer_db"


def load_settings() -> AppSettings:
    """Build settings from environment variables (and .env when present)"""
    return AppSettings(
        extraction_policy=os.getenv("EXTRACTION_POLICY", ExtractionPolicy.REMOTE_WITH_FALLBACK.value),
        llm=LLMSettings(
            api_key=os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY"),
            base_url=os.getenv("LLM_BASE_URL", "https://api.openai.com/v1"),
            model_name=os.getenv("LLM_MODEL", "gpt-4o"),
            temperature=float(os.getenv("LLM_TEMPERATURE", "0.1")),
            timeout=int(os.getenv("LLM_TIMEOUT", "20")),
        ),
        confidence_weights=ConfidenceWeights(
            required=float(os.getenv("CONFIDENCE_REQUIRED_WEIGHT", "2.0")),
            important=float(os.getenv("CONFIDENCE_IMPORTANT_WEIGHT", "1.0")),
            optional=float(os.getenv("CONFIDENCE_OPTIONAL_WEIGHT", "0.5")),
        ),
        compatibility_weights=CompatibilityWeights(
            skill_weight=float(os.getenv("SKILL_WEIGHT", "0.6")),
            requirement_weight=float(os.getenv("REQUIREMENT_WEIGHT", "0.4")),
            baseline=float(os.getenv("COMPATIBILITY_BASELINE", "50")),
            keyword_bonus=float(os.getenv("KEYWORD_BONUS", "5")),
        ),
        fetch_timeout=float(os.getenv("FETCH_TIMEOUT", "15")),
        mongo_details=os.getenv("MONGO_DETAILS", "mongodb://localhost:27017"),
        db_name=os.getenv("DB_NAME", "resume_optimizer_db"),
    )


@lru_cache()
def get_settings() -> AppSettings:
    return load_settings()
