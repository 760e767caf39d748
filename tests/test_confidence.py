import pytest

from conftest import JOB_TEXT
from resume_optimizer.models.models import JobPosting
from resume_optimizer.models.settings import ConfidenceWeights
from resume_optimizer.services.confidence import MISSING_FIELD_CHECKLIST, score_job_confidence
from resume_optimizer.services.job_extractor import extract_job_from_text


def complete_job(**overrides):
    fields = dict(
        title="Engenheiro de Dados",
        company="DataCorp",
        seniority="senior",
        area="Dados",
        location="São Paulo",
        contract_type="CLT",
        salary_range="R$ 15.000 - R$ 18.000",
        experience_requirement="5 anos com pipelines de dados",
        responsibilities=["Construir pipelines"],
        benefits=["Plano de saúde"],
        skills=["Python", "SQL"],
    )
    fields.update(overrides)
    return JobPosting(**fields)


class TestScoreJobConfidence:
    """Test cases for the job extraction confidence rubric"""

    def test_complete_job(self):
        confidence = score_job_confidence(complete_job())
        assert confidence.score == 1.0
        assert confidence.missing_fields == []

    def test_empty_job(self):
        confidence = score_job_confidence(JobPosting(title="", company=""))
        assert confidence.score == 0.0
        assert confidence.missing_fields == [name for name, _ in MISSING_FIELD_CHECKLIST]

    def test_locally_extracted_job(self):
        # title + company (2 x 2) and skills (0.5) out of 9
        confidence = score_job_confidence(extract_job_from_text(JOB_TEXT))
        assert confidence.score == 0.5
        assert confidence.missing_fields == [
            "senioridade",
            "area",
            "localizacao",
            "tipo_contrato",
            "salario_faixa",
            "responsabilidades",
            "requisitos.experiencia",
            "beneficios",
        ]

    def test_blank_strings_count_as_missing(self):
        confidence = score_job_confidence(complete_job(area="   "))
        assert "area" in confidence.missing_fields
        assert confidence.score == round(8 / 9, 2)

    @pytest.mark.parametrize("field,value", [
        ("title", "Engenheiro de Dados"),
        ("company", "DataCorp"),
        ("seniority", "pleno"),
        ("benefits", ["Vale refeição"]),
    ])
    def test_adding_a_field_never_lowers_score(self, field, value):
        base = JobPosting(title="", company="")
        before = score_job_confidence(base).score
        after = score_job_confidence(base.copy(update={field: value})).score
        assert after >= before

    def test_weights_are_configurable(self):
        weights = ConfidenceWeights(required=1.0, important=0.0, optional=0.0)
        confidence = score_job_confidence(JobPosting(title="Analista", company=""), weights)
        assert confidence.score == 0.5

    def test_score_in_unit_interval(self):
        for job in (JobPosting(), complete_job(), extract_job_from_text("")):
            score = score_job_confidence(job).score
            assert 0.0 <= score <= 1.0
