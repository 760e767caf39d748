"""
Regex based resume profile extraction.

The extractor is the last resort when the LLM cannot be used, so it only
reports what it actually finds: every field without a match is None.
Text produced by the upload stub (see helpers.parsing) yields no profile
at all.
"""
import re
from typing import List, Optional

from resume_optimizer.helpers.parsing import contains_placeholder
from resume_optimizer.models.models import ResumeProfile

EDUCATION_LIMIT = 500
EXPERIENCE_LIMIT = 1000
MAX_SKILLS = 20
MAX_CERTIFICATIONS = 10
MAX_PROJECTS = 10

UPPER = "A-ZÀ-ÖØ-Þ"
LOWER = "a-zß-öø-ÿ"
NAME_WORD = f"[{UPPER}][{LOWER}]+"
NAME_PARTICLE = r"(?:d[aeo]s?|e)[ \t]+"

BRAZILIAN_STATES = (
    "AC|AL|AP|AM|BA|CE|DF|ES|GO|MA|MT|MS|MG|PA|PB|PR|PE|PI|RJ|RN|RS|RO|RR|SC|SP|SE|TO"
)

NAME_RE = re.compile(rf"^[ \t]*({NAME_WORD}(?:[ \t]+(?:{NAME_PARTICLE})?{NAME_WORD})+)", re.M)
EMAIL_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
PHONE_RE = re.compile(r"\(?\d{2}\)?[ \t]*\d{4,5}-?\d{4}")
STREET_RE = re.compile(r"((?:Rua|Av\.|Avenida|Alameda|Travessa|Praça)[ \t]+[^\n]+)")
CITY_STATE_RE = re.compile(
    rf"({NAME_WORD}(?:[ \t]+(?:{NAME_PARTICLE})?{NAME_WORD})*,[ \t]*(?:{BRAZILIAN_STATES}))(?![A-Za-z])"
)

SECTION_HEADERS = {
    "education": r"(?:formação|educação|education)(?:[ \t]+acadêmica|[ \t]+academica)?",
    "experience": r"(?:experiência|experiencia|experience)(?:[ \t]+profissional|[ \t]+professional)?",
    "skills": r"(?:habilidades|competências|skills)(?:[ \t]+técnicas)?",
    "certifications": r"(?:certificações|certificados|certifications)",
    "projects": r"(?:projetos|projects)",
}
_ANY_HEADER = "|".join(SECTION_HEADERS.values())
_HEADER_END = r"[ \t]*(?::|$)"

LIST_SPLIT_RE = re.compile(r"[,\n•-]")


def _section_re(header: str):
    # a header is the whole line or ends in a colon; body runs to the next header
    return re.compile(
        rf"^[ \t]*{header}{_HEADER_END}(.*?)(?=^[ \t]*(?:{_ANY_HEADER}){_HEADER_END}|\Z)",
        re.I | re.M | re.S,
    )


SECTION_RES = {name: _section_re(header) for name, header in SECTION_HEADERS.items()}


def _first_group(pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def _section(name: str, text: str) -> Optional[str]:
    return _first_group(SECTION_RES[name], text)


def _split_items(body: Optional[str], min_len: int, max_len: int, limit: int) -> List[str]:
    if not body:
        return []
    items = [item.strip() for item in LIST_SPLIT_RE.split(body)]
    return [item for item in items if min_len <= len(item) <= max_len][:limit]


def _extract_address(text: str) -> Optional[str]:
    return _first_group(STREET_RE, text) or _first_group(CITY_STATE_RE, text)


def _none_if_empty(value):
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, list) and not value:
        return None
    return value


def extract_resume_profile(text: str) -> Optional[ResumeProfile]:
    """
    Extract personal and professional fields from resume text.

    Returns None when the text is placeholder content from an unparsed
    binary upload; otherwise a profile whose missing fields are None.
    """
    text = text or ""
    if contains_placeholder(text):
        return None

    phone = PHONE_RE.search(text)
    education = _section("education", text)
    experience = _section("experience", text)
    fields = {
        "full_name": _first_group(NAME_RE, text),
        "email": _first_group(EMAIL_RE, text),
        "phone": phone.group(0).strip() if phone else None,
        "address": _extract_address(text),
        "education": education[:EDUCATION_LIMIT] if education else None,
        "experience": experience[:EXPERIENCE_LIMIT] if experience else None,
        "skills": _split_items(_section("skills", text), 2, 50, MAX_SKILLS),
        "certifications": _split_items(_section("certifications", text), 6, 10 ** 6, MAX_CERTIFICATIONS),
        "projects": _split_items(_section("projects", text), 11, 10 ** 6, MAX_PROJECTS),
    }
    return ResumeProfile(**{key: _none_if_empty(value) for key, value in fields.items()})


def is_profile_incomplete(profile: Optional[ResumeProfile]) -> bool:
    """True when a stored profile should be replaced by a freshly extracted one."""
    if profile is None:
        return True
    if not (profile.full_name and profile.email and profile.phone):
        return True
    return not (profile.experience or profile.education or profile.skills)
