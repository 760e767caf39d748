from typing import Optional

from resume_optimizer.models.models import JobConfidence, JobPosting
from resume_optimizer.models.settings import ConfidenceWeights

# (user-facing name, JobPosting attribute); names are shown to the user as-is
MISSING_FIELD_CHECKLIST = [
    ("title", "title"),
    ("empresa.nome", "company"),
    ("senioridade", "seniority"),
    ("area", "area"),
    ("localizacao", "location"),
    ("tipo_contrato", "contract_type"),
    ("salario_faixa", "salary_range"),
    ("responsabilidades", "responsibilities"),
    ("requisitos.experiencia", "experience_requirement"),
    ("beneficios", "benefits"),
]

REQUIRED_FIELDS = ["title", "company"]
IMPORTANT_FIELDS = ["seniority", "area", "responsibilities", "experience_requirement"]
OPTIONAL_FIELDS = ["benefits", "skills"]


def _is_present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def find_missing_fields(job: JobPosting):
    return [name for name, attr in MISSING_FIELD_CHECKLIST if not _is_present(getattr(job, attr, None))]


def score_job_confidence(job: JobPosting, weights: Optional[ConfidenceWeights] = None) -> JobConfidence:
    """
    Weighted completeness of an extracted job posting.

    Each tier contributes its weight per present field; the score is the
    present share of the total weight, rounded to two decimals.
    """
    weights = weights or ConfidenceWeights()
    tiers = [
        (REQUIRED_FIELDS, weights.required),
        (IMPORTANT_FIELDS, weights.important),
        (OPTIONAL_FIELDS, weights.optional),
    ]

    total = 0.0
    present = 0.0
    for fields, weight in tiers:
        for field in fields:
            total += weight
            if _is_present(getattr(job, field, None)):
                present += weight

    score = present / total if total > 0 else 0.0
    score = round(min(max(score, 0.0), 1.0), 2)
    return JobConfidence(score=score, missing_fields=find_missing_fields(job))
