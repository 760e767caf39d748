from typing import List, Optional, Tuple

from resume_optimizer.models.models import CompatibilityAssessment
from resume_optimizer.models.settings import CompatibilityWeights

GENERIC_KEYWORDS = ["experiência", "conhecimento", "habilidade", "projeto", "desenvolvimento"]

DEFAULT_STRENGTHS = [
    "Experiência relevante identificada no currículo",
    "Conhecimento das principais áreas mencionadas na vaga",
    "Perfil alinhado com as expectativas do mercado",
]
DEFAULT_WEAKNESSES = [
    "Algumas habilidades específicas podem ser desenvolvidas",
    "Experiência em certas áreas pode ser aprofundada",
]
DEFAULT_IMPROVEMENTS = [
    "Destacar mais resultados quantificáveis nas experiências",
    "Incluir palavras-chave específicas da vaga",
    "Reorganizar o currículo para destacar pontos mais relevantes",
    "Adicionar projetos ou certificações relacionadas à área",
]

MIN_STRENGTHS = 3
MIN_WEAKNESSES = 2
MIN_IMPROVEMENTS = 4
MAX_ITEMS = 8


def split_matches(items: List[str], text: str) -> Tuple[List[str], List[str]]:
    # plain substring containment, so "java" is found inside "javascript"
    lowered = text.lower()
    matched = [i for i in items if i.lower() in lowered]
    missing = [i for i in items if i.lower() not in lowered]
    return matched, missing


def match_ratio(items: List[str], text: str) -> float:
    if not items:
        return 0.0
    matched, _ = split_matches(items, text)
    return len(matched) / len(items)


def shared_keywords(resume_text: str, description: str) -> List[str]:
    resume, job = resume_text.lower(), description.lower()
    return [k for k in GENERIC_KEYWORDS if k in resume and k in job]


def pad_items(items: List[str], defaults: List[str], minimum: int) -> List[str]:
    out = list(items[:MAX_ITEMS])
    for d in defaults:
        if len(out) >= minimum:
            break
        if d not in out:
            out.append(d)
    return out


def score_compatibility(
    resume_text: str,
    description: str = "",
    requirements: Optional[List[str]] = None,
    skills: Optional[List[str]] = None,
    weights: Optional[CompatibilityWeights] = None,
) -> CompatibilityAssessment:
    """
    Keyword-overlap compatibility between a resume and a job posting.

    With both skills and requirements the score blends their match ratios
    (skill_weight / requirement_weight); with one list it is that ratio;
    with neither it starts from the baseline. Each generic keyword present
    in both texts adds keyword_bonus. Result is clamped to 0..100.
    """
    weights = weights or CompatibilityWeights()
    resume_text = resume_text or ""
    description = description or ""
    requirements = requirements or []
    skills = skills or []

    if skills and requirements:
        score = 100 * (
            weights.skill_weight * match_ratio(skills, resume_text)
            + weights.requirement_weight * match_ratio(requirements, resume_text)
        )
    elif skills:
        score = 100 * match_ratio(skills, resume_text)
    elif requirements:
        score = 100 * match_ratio(requirements, resume_text)
    else:
        score = weights.baseline

    score += weights.keyword_bonus * len(shared_keywords(resume_text, description))
    score = int(round(min(max(score, 0.0), 100.0)))

    matched, missing = split_matches(skills, resume_text)
    strengths = [f"Experiência comprovada em {s}" for s in matched]
    weaknesses = [f"Experiência em {s} não evidenciada" for s in missing]
    improvements = []
    if missing:
        improvements.append(f"Incluir no currículo experiências com {', '.join(missing[:5])}")
        improvements += [f"Buscar capacitação ou projetos práticos em {s}" for s in missing]

    return CompatibilityAssessment(
        score=score,
        strengths=pad_items(strengths, DEFAULT_STRENGTHS, MIN_STRENGTHS),
        weaknesses=pad_items(weaknesses, DEFAULT_WEAKNESSES, MIN_WEAKNESSES),
        improvements=pad_items(improvements, DEFAULT_IMPROVEMENTS, MIN_IMPROVEMENTS),
        matched_skills=matched,
        missing_skills=missing,
    )
