import pytest

from conftest import RESUME_TEXT
from resume_optimizer.helpers.parsing import extract_text_from_upload
from resume_optimizer.models.models import ResumeProfile
from resume_optimizer.services.profile_extractor import (
    EDUCATION_LIMIT,
    MAX_SKILLS,
    extract_resume_profile,
    is_profile_incomplete,
)


def assert_no_empty_values(profile: ResumeProfile):
    for key, value in profile.dict().items():
        assert value != "", key
        assert value != [], key


class TestExtractResumeProfile:
    """Test cases for the regex resume profile extractor"""

    def test_contact_only_resume(self):
        profile = extract_resume_profile("João Silva\njoao@email.com\n(11) 98888-7777")

        assert profile == ResumeProfile(
            full_name="João Silva",
            email="joao@email.com",
            phone="(11) 98888-7777",
        )

    def test_full_resume(self):
        profile = extract_resume_profile(RESUME_TEXT)

        assert profile.full_name == "Maria Souza"
        assert profile.email == "maria.souza@email.com"
        assert profile.phone == "(21) 3333-4444"
        assert profile.address == "Rio de Janeiro, RJ"
        assert profile.experience == "Desenvolvedora Python na Acme (2019-2023)"
        assert profile.education == "Bacharelado em Ciência da Computação - UFRJ"
        assert profile.skills == ["Python", "Django", "Docker", "Git"]
        assert profile.certifications == ["AWS Certified Developer", "Scrum Master (PSM I)"]
        assert profile.projects == ["Plataforma de recomendação de vagas"]

    def test_street_address(self):
        profile = extract_resume_profile("Ana Lima\nRua das Flores, 123 - Centro\nana@x.com")
        assert profile.address == "Rua das Flores, 123 - Centro"

    def test_unknown_state_code_is_not_an_address(self):
        assert extract_resume_profile("Skills\nReact, JS").address is None

    @pytest.mark.parametrize("filename", ["cv.pdf", "cv.docx"])
    def test_placeholder_text_yields_no_profile(self, filename):
        text = extract_text_from_upload(filename, b"binary")
        assert extract_resume_profile(text) is None

    def test_empty_text_is_an_empty_profile(self):
        profile = extract_resume_profile("")
        assert profile is not None
        assert profile == ResumeProfile()

    @pytest.mark.parametrize("text", [
        "",
        "   \n\n",
        RESUME_TEXT,
        "Habilidades:\n-\n,\n",
        "Projetos\n- curto\n",
        "Certificações\nABC\n",
    ])
    def test_absent_fields_are_none(self, text):
        assert_no_empty_values(extract_resume_profile(text))

    def test_short_list_items_are_filtered(self):
        profile = extract_resume_profile("Projetos\n- curto\nCertificações\nABC\n")
        assert profile.projects is None
        assert profile.certifications is None

    def test_skills_are_capped(self):
        skills = ", ".join(f"Skill{i}" for i in range(30))
        profile = extract_resume_profile(f"Habilidades: {skills}")
        assert len(profile.skills) == MAX_SKILLS
        assert profile.skills[0] == "Skill0"

    def test_header_words_inside_a_section_do_not_end_it(self):
        profile = extract_resume_profile("Experiência\nSkills usadas: Python em projetos\nHabilidades\nPython, Git")

        assert profile.experience == "Skills usadas: Python em projetos"
        assert profile.skills == ["Python", "Git"]

    def test_education_is_truncated(self):
        profile = extract_resume_profile("Formação\n" + "a" * 800)
        assert len(profile.education) == EDUCATION_LIMIT

    def test_idempotent(self):
        assert extract_resume_profile(RESUME_TEXT) == extract_resume_profile(RESUME_TEXT)


class TestIsProfileIncomplete:

    def test_missing_profile(self):
        assert is_profile_incomplete(None)

    def test_complete_profile(self):
        assert not is_profile_incomplete(extract_resume_profile(RESUME_TEXT))

    def test_missing_contact(self):
        profile = extract_resume_profile(RESUME_TEXT).copy(update={"phone": None})
        assert is_profile_incomplete(profile)

    def test_contact_without_professional_data(self):
        profile = extract_resume_profile("João Silva\njoao@email.com\n(11) 98888-7777")
        assert is_profile_incomplete(profile)
