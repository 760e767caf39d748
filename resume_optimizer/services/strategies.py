"""
Extraction strategies: the LLM backed implementation, the deterministic
local one, and the fallback combination selected by EXTRACTION_POLICY.
"""
from functools import lru_cache
from typing import Any, Dict, List, Optional

import requests

from resume_optimizer.helpers.parsing import contains_placeholder, truncate
from resume_optimizer.helpers.prompts import (
    COMPATIBILITY_PROMPT,
    COMPATIBILITY_SYSTEM,
    JOB_EXTRACT_SYSTEM,
    JOB_HTML_PROMPT,
    JOB_TEXT_PROMPT,
    PROFILE_PROMPT,
    PROFILE_SYSTEM,
    REWRITE_PROMPT,
    REWRITE_SYSTEM,
)
from resume_optimizer.models.models import (
    DEFAULT_COMPANY,
    DEFAULT_JOB_TITLE,
    CompatibilityAssessment,
    JobPosting,
    ResumeProfile,
)
from resume_optimizer.models.settings import AppSettings, ExtractionPolicy, get_settings
from resume_optimizer.services import job_extractor, matching, profile_extractor
from resume_optimizer.services.assembler import render_optimized_resume
from resume_optimizer.utils.exceptions import ConfigurationError, ModelError, ResumeOptimizerError
from resume_optimizer.utils.logging_config import get_logger, log_fallback
from resume_optimizer.utils.utils import llm_generate, safe_json

logger = get_logger("strategies")

SENIORITY_VALUES = {"junior", "pleno", "senior", "especialista"}
WORK_MODEL_VALUES = {"presencial", "hibrido", "remoto"}
ACCENTS = str.maketrans("íêú", "ieu")


def _as_text(x: Any) -> str:
    if x is None:
        return ""
    if isinstance(x, list):
        return " ".join([str(t).strip() for t in x if str(t).strip()])
    return str(x).strip()


def _as_list(x: Any) -> List[str]:
    if x is None:
        return []
    if isinstance(x, str):
        parts = [p.strip() for p in x.replace(";", ",").split(",")]
        return [p for p in parts if p]
    if isinstance(x, list):
        return [str(t).strip() for t in x if t is not None and str(t).strip()]
    return []


def _enum_or_none(x: Any, allowed) -> Optional[str]:
    value = _as_text(x).lower().translate(ACCENTS)
    return value if value in allowed else None


def _pick(data: Dict[str, Any], *keys):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


class ExtractionStrategy:
    """Capability shared by the remote and local implementations."""

    name = "base"

    def extract_job_from_text(self, text: str) -> JobPosting:
        raise NotImplementedError

    def extract_job_from_html(self, text: str, source_url: str) -> JobPosting:
        raise NotImplementedError

    def extract_profile(self, text: str) -> Optional[ResumeProfile]:
        raise NotImplementedError

    def score_compatibility(self, resume_text: str, job: JobPosting) -> CompatibilityAssessment:
        raise NotImplementedError

    def rewrite_resume(
        self,
        profile: Optional[ResumeProfile],
        job: JobPosting,
        assessment: CompatibilityAssessment,
    ) -> str:
        raise NotImplementedError


class LocalExtractionStrategy(ExtractionStrategy):
    """Deterministic heuristics; never calls out of process."""

    name = "local"

    def __init__(self, settings: AppSettings = None):
        self.settings = settings or get_settings()

    def extract_job_from_text(self, text: str) -> JobPosting:
        return job_extractor.extract_job_from_text(text)

    def extract_job_from_html(self, text: str, source_url: str) -> JobPosting:
        return job_extractor.extract_job_from_html(text, source_url)

    def extract_profile(self, text: str) -> Optional[ResumeProfile]:
        return profile_extractor.extract_resume_profile(text)

    def score_compatibility(self, resume_text: str, job: JobPosting) -> CompatibilityAssessment:
        return matching.score_compatibility(
            resume_text,
            job.description,
            requirements=job.requirements,
            skills=job.skills,
            weights=self.settings.compatibility_weights,
        )

    def rewrite_resume(self, profile, job, assessment) -> str:
        return render_optimized_resume(profile, job, assessment)


class RemoteExtractionStrategy(ExtractionStrategy):
    """LLM backed implementation. Every failure surfaces as an exception."""

    name = "remote"

    def __init__(self, settings: AppSettings = None):
        self.settings = settings or get_settings()
        if not self.settings.llm.is_configured:
            raise ConfigurationError("LLM API key is not configured", config_key="LLM_API_KEY")

    def _ask(self, system: str, prompt: str, temperature: float = None) -> str:
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]
        return llm_generate(messages, self.settings.llm, temperature=temperature)

    def _ask_json(self, system: str, prompt: str, temperature: float = None) -> Dict[str, Any]:
        data = safe_json(self._ask(system, prompt, temperature), fallback={})
        if not isinstance(data, dict) or not data:
            raise ModelError("LLM answer did not contain a JSON object", model_name=self.settings.llm.model_name)
        return data

    def _job_from_payload(self, data: Dict[str, Any], text: str, url: str = None) -> JobPosting:
        vaga = data.get("vaga") if isinstance(data.get("vaga"), dict) else data
        empresa = vaga.get("empresa") if isinstance(vaga.get("empresa"), dict) else {}
        requisitos = vaga.get("requisitos") if isinstance(vaga.get("requisitos"), dict) else {}

        title = _as_text(vaga.get("titulo")) or DEFAULT_JOB_TITLE
        company = _as_text(empresa.get("nome")) if empresa else _as_text(vaga.get("empresa"))
        company = company or DEFAULT_COMPANY
        skills = _as_list(requisitos.get("competencias_tecnicas"))
        experience = _as_text(requisitos.get("experiencia")) or None
        requirements = _as_list(requisitos.get("formacao")) + _as_list(requisitos.get("diferenciais"))
        if experience:
            requirements.insert(0, experience)

        work_model = _enum_or_none(empresa.get("modelo_trabalho"), WORK_MODEL_VALUES)
        location = _as_text(vaga.get("localizacao")) or None
        summary = _as_text(data.get("resumo_curto"))
        if not summary:
            summary = job_extractor.build_summary(company, title, skills, work_model, location)

        return JobPosting(
            title=title,
            company=company,
            description=truncate((text or "").strip(), job_extractor.DESCRIPTION_LIMIT),
            summary=truncate(summary, job_extractor.DESCRIPTION_LIMIT),
            requirements=requirements,
            skills=skills,
            seniority=_enum_or_none(vaga.get("senioridade"), SENIORITY_VALUES),
            work_model=work_model,
            url=url,
            area=_as_text(vaga.get("area")) or None,
            location=location,
            contract_type=_as_text(vaga.get("tipo_contrato")) or None,
            salary_range=_as_text(vaga.get("salario_faixa")) or None,
            experience_requirement=experience,
            responsibilities=_as_list(vaga.get("responsabilidades")),
            benefits=_as_list(vaga.get("beneficios")),
        )

    def extract_job_from_text(self, text: str) -> JobPosting:
        data = self._ask_json(JOB_EXTRACT_SYSTEM, JOB_TEXT_PROMPT.format(text=text))
        return self._job_from_payload(data, text)

    def extract_job_from_html(self, text: str, source_url: str) -> JobPosting:
        data = self._ask_json(JOB_EXTRACT_SYSTEM, JOB_HTML_PROMPT.format(url=source_url, text=text))
        return self._job_from_payload(data, text, url=source_url)

    def extract_profile(self, text: str) -> Optional[ResumeProfile]:
        if contains_placeholder(text or ""):
            return None
        data = self._ask_json(PROFILE_SYSTEM, PROFILE_PROMPT.format(text=text))

        education = _as_text(_pick(data, "education"))
        experience = _as_text(_pick(data, "experience"))
        skills = _as_list(_pick(data, "skills"))[:profile_extractor.MAX_SKILLS]
        certifications = _as_list(_pick(data, "certifications"))[:profile_extractor.MAX_CERTIFICATIONS]
        projects = _as_list(_pick(data, "projects"))[:profile_extractor.MAX_PROJECTS]
        return ResumeProfile(
            full_name=_as_text(_pick(data, "full_name", "fullName")) or None,
            email=_as_text(_pick(data, "email")) or None,
            phone=_as_text(_pick(data, "phone")) or None,
            address=_as_text(_pick(data, "address")) or None,
            education=education[:profile_extractor.EDUCATION_LIMIT] or None,
            experience=experience[:profile_extractor.EXPERIENCE_LIMIT] or None,
            skills=skills or None,
            certifications=certifications or None,
            projects=projects or None,
        )

    def score_compatibility(self, resume_text: str, job: JobPosting) -> CompatibilityAssessment:
        prompt = COMPATIBILITY_PROMPT.format(
            resume_text=resume_text,
            description=job.description or job.summary,
            requirements="\n".join(job.requirements) or "Não especificados",
            skills=", ".join(job.skills) or "Não especificadas",
        )
        data = self._ask_json(COMPATIBILITY_SYSTEM, prompt, temperature=0.2)

        try:
            score = float(_pick(data, "score", "compatibilityScore"))
        except (TypeError, ValueError) as e:
            raise ModelError("LLM answer has no numeric score", model_name=self.settings.llm.model_name, cause=e)
        score = int(round(min(max(score, 0.0), 100.0)))

        matched, missing = matching.split_matches(job.skills, resume_text)
        return CompatibilityAssessment(
            score=score,
            strengths=matching.pad_items(_as_list(data.get("strengths")), matching.DEFAULT_STRENGTHS, matching.MIN_STRENGTHS),
            weaknesses=matching.pad_items(_as_list(data.get("weaknesses")), matching.DEFAULT_WEAKNESSES, matching.MIN_WEAKNESSES),
            improvements=matching.pad_items(_as_list(data.get("improvements")), matching.DEFAULT_IMPROVEMENTS, matching.MIN_IMPROVEMENTS),
            matched_skills=matched,
            missing_skills=missing,
        )

    def rewrite_resume(self, profile, job, assessment) -> str:
        profile = profile or ResumeProfile()
        missing = "Não informado"
        prompt = REWRITE_PROMPT.format(
            full_name=profile.full_name or missing,
            email=profile.email or missing,
            phone=profile.phone or missing,
            education=profile.education or missing,
            experience=profile.experience or missing,
            profile_skills=", ".join(profile.skills or []) or missing,
            title=job.title,
            company=job.company,
            skills=", ".join(job.skills) or "Não especificadas",
            strengths="\n".join(assessment.strengths),
            improvements="\n".join(assessment.improvements),
        )
        return self._ask(REWRITE_SYSTEM, prompt, temperature=0.3).strip()


class FallbackExtractionStrategy(ExtractionStrategy):
    """Tries the remote strategy first and answers locally when it fails."""

    name = "remote_with_fallback"
    recoverable = (ResumeOptimizerError, requests.RequestException, ValueError)

    def __init__(self, remote: ExtractionStrategy, local: ExtractionStrategy):
        self.remote = remote
        self.local = local

    def _attempt(self, operation: str, *args):
        try:
            return getattr(self.remote, operation)(*args)
        except self.recoverable as e:
            log_fallback(operation, e)
            return getattr(self.local, operation)(*args)

    def extract_job_from_text(self, text):
        return self._attempt("extract_job_from_text", text)

    def extract_job_from_html(self, text, source_url):
        return self._attempt("extract_job_from_html", text, source_url)

    def extract_profile(self, text):
        return self._attempt("extract_profile", text)

    def score_compatibility(self, resume_text, job):
        return self._attempt("score_compatibility", resume_text, job)

    def rewrite_resume(self, profile, job, assessment):
        return self._attempt("rewrite_resume", profile, job, assessment)


def build_strategy(settings: AppSettings = None) -> ExtractionStrategy:
    settings = settings or get_settings()
    local = LocalExtractionStrategy(settings)
    if settings.extraction_policy == ExtractionPolicy.LOCAL:
        return local
    if not settings.llm.is_configured:
        logger.warning(f"Extraction policy '{settings.extraction_policy.value}' requested without an LLM API key; using local heuristics")
        return local
    remote = RemoteExtractionStrategy(settings)
    if settings.extraction_policy == ExtractionPolicy.REMOTE:
        return remote
    return FallbackExtractionStrategy(remote, local)


@lru_cache()
def get_strategy() -> ExtractionStrategy:
    """FastAPI dependency returning the process-wide strategy."""
    return build_strategy()
