"""
Deterministic job posting extraction used when the LLM path is unavailable.

Everything here is a pure function of its input text. Values are never
invented: a field without any signal gets the fixed placeholder (title,
company), an empty list, or None.
"""
import re
from typing import List, Optional

from resume_optimizer.helpers.parsing import truncate
from resume_optimizer.models.models import DEFAULT_COMPANY, DEFAULT_JOB_TITLE, JobPosting

MAX_TITLE_LINE_LENGTH = 100
DESCRIPTION_LIMIT = 500

SKILL_VOCABULARY = [
    "JavaScript", "TypeScript", "React", "Angular", "Vue.js", "Node.js", "Python", "Java", "C#", "PHP",
    "HTML", "CSS", "SQL", "MongoDB", "PostgreSQL", "MySQL", "Git", "Docker", "Kubernetes",
    "AWS", "Azure", "GCP", "REST", "GraphQL", "Agile", "Scrum", "TDD", "CI/CD",
]

TITLE_PATTERNS = [
    re.compile(r"vaga:[ \t]*(.+)", re.I),
    re.compile(r"cargo:[ \t]*(.+)", re.I),
    re.compile(r"posição:[ \t]*(.+)", re.I),
    re.compile(r"oportunidade:[ \t]*(.+)", re.I),
]
COMPANY_PATTERNS = [
    re.compile(r"empresa:[ \t]*(.+)", re.I),
    re.compile(r"companhia:[ \t]*(.+)", re.I),
    re.compile(r"organização:[ \t]*(.+)", re.I),
    re.compile(r"cliente:[ \t]*(.+)", re.I),
]

REQUIREMENTS_OPEN = re.compile(r"requisitos|requirements|qualificações|qualifications|experiência|formação", re.I)
REQUIREMENTS_CLOSE = re.compile(r"benefícios|beneficios|benefits|salário|salario|salary|contato|contact", re.I)
BULLET_PREFIXES = ("•", "-", "*")

# Tiers are tested in order; the first tier with a hit wins
SENIORITY_KEYWORDS = (
    ("junior", ("junior", "júnior", "jr")),
    ("pleno", ("pleno", "mid-level")),
    ("senior", ("senior", "sênior", "sr")),
    ("especialista", ("especialista", "expert", "lead")),
)
WORK_MODEL_KEYWORDS = (
    ("remoto", ("remoto", "remote", "home office")),
    ("hibrido", ("híbrido", "hibrido", "hybrid")),
    ("presencial", ("presencial", "on-site", "escritório")),
)


def _first_keyword_tier(text: str, tiers) -> Optional[str]:
    lower_text = (text or "").lower()
    for label, keywords in tiers:
        if any(keyword in lower_text for keyword in keywords):
            return label
    return None


def classify_seniority(text: str) -> Optional[str]:
    return _first_keyword_tier(text, SENIORITY_KEYWORDS)


def classify_work_model(text: str) -> Optional[str]:
    return _first_keyword_tier(text, WORK_MODEL_KEYWORDS)


def _first_label_match(text: str, patterns) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_title(text: str) -> str:
    first_line = next((line.strip() for line in text.splitlines() if line.strip()), "")
    if first_line and len(first_line) < MAX_TITLE_LINE_LENGTH:
        return first_line
    return _first_label_match(text, TITLE_PATTERNS) or DEFAULT_JOB_TITLE


def extract_company(text: str) -> str:
    return _first_label_match(text, COMPANY_PATTERNS) or DEFAULT_COMPANY


def extract_requirements(text: str) -> List[str]:
    """Bullet lines found between a requirements heading and a benefits/salary/contact line."""
    requirements = []
    in_section = False
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        is_bullet = stripped.startswith(BULLET_PREFIXES)
        # only headings open the section; a bullet mentioning "experiência" is a requirement
        if not is_bullet and REQUIREMENTS_OPEN.search(stripped):
            in_section = True
            continue
        if REQUIREMENTS_CLOSE.search(stripped):
            in_section = False
            continue
        if in_section and is_bullet:
            item = stripped[1:].strip()
            if item:
                requirements.append(item)
    return requirements


def extract_skills(text: str) -> List[str]:
    # substring match: "Java" is also found inside "JavaScript"
    lower_text = text.lower()
    return [skill for skill in SKILL_VOCABULARY if skill.lower() in lower_text]


def build_summary(company: str, title: str, skills: List[str], work_model: str = None, location: str = None) -> str:
    parts = [company, title]
    if work_model and location:
        parts.append(f"{work_model} {location}")
    elif location:
        parts.append(location)
    if skills:
        parts.append(", ".join(skills[:3]))
    summary = " • ".join(p for p in parts if p)
    return truncate(summary, DESCRIPTION_LIMIT)


def extract_job_from_text(text: str) -> JobPosting:
    text = text or ""
    title = extract_title(text)
    company = extract_company(text)
    skills = extract_skills(text)
    return JobPosting(
        title=title,
        company=company,
        description=truncate(text.strip(), DESCRIPTION_LIMIT),
        summary=build_summary(company, title, skills),
        requirements=extract_requirements(text),
        skills=skills,
    )


def extract_job_from_html(text: str, source_url: str) -> JobPosting:
    """Extract from a page already passed through sanitize_html."""
    text = text or ""
    title = extract_title(text)
    company = extract_company(text)
    skills = extract_skills(text)
    work_model = classify_work_model(text)
    return JobPosting(
        title=title,
        company=company,
        description=truncate(text.strip(), DESCRIPTION_LIMIT),
        summary=build_summary(company, title, skills),
        requirements=extract_requirements(text),
        skills=skills,
        seniority=classify_seniority(text),
        work_model=work_model,
        url=source_url,
    )
