from typing import List, Optional

from resume_optimizer.models.models import (
    DEFAULT_COMPANY,
    CompatibilityAssessment,
    JobPosting,
    ResumeProfile,
)

DEFAULT_CANDIDATE_NAME = "Candidato"
DEFAULT_SOFT_SKILLS = [
    "Comunicação eficaz",
    "Trabalho em equipe",
    "Resolução de problemas",
    "Adaptabilidade",
    "Organização",
]
DEFAULT_EDUCATION = "Formação adequada para a área de atuação."
BULLET = "• "


def _objective(job: JobPosting) -> str:
    company = f" na {job.company}" if job.company and job.company != DEFAULT_COMPANY else ""
    return (
        f"Profissional experiente buscando oportunidade como {job.title}{company}, "
        "com foco em aplicar conhecimentos e habilidades para contribuir com os "
        "objetivos da empresa e crescer profissionalmente na área."
    )


def _skills(profile: ResumeProfile, job: JobPosting, assessment: CompatibilityAssessment) -> List[str]:
    if profile.skills:
        wanted = {s.lower() for s in job.skills}
        relevant = [s for s in profile.skills if s.lower() in wanted]
        return relevant + [s for s in profile.skills if s not in relevant]
    if assessment.matched_skills:
        return list(assessment.matched_skills)
    return list(DEFAULT_SOFT_SKILLS)


def _bullets(items: List[str]) -> List[str]:
    return [f"{BULLET}{item}" for item in items]


def render_optimized_resume(
    profile: Optional[ResumeProfile],
    job: JobPosting,
    assessment: CompatibilityAssessment,
) -> str:
    """
    Render a plain-text resume tuned to the job.

    Sections always appear in the same order; a missing profile field is
    replaced by a generic sentence so the document is complete for any input.
    """
    profile = profile or ResumeProfile()

    lines = [profile.full_name or DEFAULT_CANDIDATE_NAME]
    if profile.email:
        lines.append(f"Email: {profile.email}")
    if profile.phone:
        lines.append(f"Telefone: {profile.phone}")
    if profile.address:
        lines.append(f"Endereço: {profile.address}")

    lines += ["", "OBJETIVO PROFISSIONAL", _objective(job)]

    if assessment.strengths:
        lines += ["", "PONTOS FORTES"] + _bullets(assessment.strengths)

    lines += ["", "EXPERIÊNCIA PROFISSIONAL"]
    lines.append(
        profile.experience
        or f"Experiência relevante na área de {job.title.lower()}, com conhecimento "
        "das principais práticas e ferramentas do mercado."
    )
    if profile.projects:
        lines += ["Projetos:"] + _bullets(profile.projects)

    lines += ["", "FORMAÇÃO ACADÊMICA", profile.education or DEFAULT_EDUCATION]
    if profile.certifications:
        lines += ["Certificações:"] + _bullets(profile.certifications)

    lines += ["", "HABILIDADES TÉCNICAS E COMPORTAMENTAIS"] + _bullets(_skills(profile, job, assessment))

    if assessment.improvements:
        lines += ["", "ÁREAS DE DESENVOLVIMENTO"] + _bullets(assessment.improvements)

    return "\n".join(lines) + "\n"
