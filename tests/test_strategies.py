import json

import pytest
import requests
from unittest.mock import Mock, patch

from conftest import JOB_TEXT, RESUME_TEXT
from resume_optimizer.models.models import JobPosting
from resume_optimizer.models.settings import AppSettings, LLMSettings
from resume_optimizer.services.job_extractor import extract_job_from_text
from resume_optimizer.services.profile_extractor import extract_resume_profile
from resume_optimizer.services.strategies import (
    FallbackExtractionStrategy,
    LocalExtractionStrategy,
    RemoteExtractionStrategy,
    build_strategy,
)
from resume_optimizer.utils.exceptions import ConfigurationError, ExternalServiceError, ModelError
from resume_optimizer.utils.logging_config import FALLBACK_LOGGER

REMOTE_JOB = {
    "vaga": {
        "titulo": "Engenheira de Dados",
        "senioridade": "Sênior",
        "area": "Dados",
        "empresa": {"nome": "DataCorp", "modelo_trabalho": "híbrido"},
        "localizacao": "Curitiba, PR",
        "tipo_contrato": "CLT",
        "salario_faixa": None,
        "beneficios": ["Plano de saúde"],
        "responsabilidades": ["Construir pipelines", ""],
        "requisitos": {
            "formacao": ["Ciência da Computação"],
            "experiencia": "3 anos com Spark",
            "competencias_tecnicas": ["Python", "SQL"],
            "diferenciais": "Airflow; dbt",
        },
    },
    "resumo_curto": "DataCorp • Engenheira de Dados • Python, SQL",
}


@pytest.fixture
def remote_settings():
    return AppSettings(llm=LLMSettings(api_key="sk-test"))


@pytest.fixture
def remote(remote_settings):
    return RemoteExtractionStrategy(remote_settings)


class TestBuildStrategy:
    """Test cases for strategy selection"""

    def test_local_policy(self, remote_settings):
        settings = AppSettings(extraction_policy="local", llm=remote_settings.llm)
        assert isinstance(build_strategy(settings), LocalExtractionStrategy)

    def test_missing_key_falls_back_to_local(self):
        assert isinstance(build_strategy(AppSettings(extraction_policy="remote_with_fallback")), LocalExtractionStrategy)

    def test_remote_with_fallback(self, remote_settings):
        strategy = build_strategy(remote_settings)
        assert isinstance(strategy, FallbackExtractionStrategy)
        assert isinstance(strategy.remote, RemoteExtractionStrategy)
        assert isinstance(strategy.local, LocalExtractionStrategy)

    def test_remote_only(self):
        settings = AppSettings(extraction_policy="remote", llm=LLMSettings(api_key="sk-test"))
        assert isinstance(build_strategy(settings), RemoteExtractionStrategy)

    def test_remote_requires_key(self):
        with pytest.raises(ConfigurationError):
            RemoteExtractionStrategy(AppSettings())


class TestLocalExtractionStrategy:

    def test_delegates_to_extractors(self, local_strategy):
        assert local_strategy.extract_job_from_text(JOB_TEXT) == extract_job_from_text(JOB_TEXT)
        assert local_strategy.extract_profile(RESUME_TEXT) == extract_resume_profile(RESUME_TEXT)

    def test_scores_with_job_fields(self, local_strategy):
        job = JobPosting(skills=["React", "Node.js", "Python"])
        assert local_strategy.score_compatibility("Experiência com React e Node.js", job).score == 67


class TestRemoteExtractionStrategy:
    """Test cases for the LLM backed strategy with the client mocked"""

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_job_payload_is_coerced(self, mock_llm, remote):
        mock_llm.return_value = "Aqui está:\n" + json.dumps(REMOTE_JOB)

        job = remote.extract_job_from_html("texto da página", "https://vagas.example.com/1")

        assert job.title == "Engenheira de Dados"
        assert job.company == "DataCorp"
        assert job.seniority == "senior"
        assert job.work_model == "hibrido"
        assert job.location == "Curitiba, PR"
        assert job.salary_range is None
        assert job.skills == ["Python", "SQL"]
        assert job.requirements == ["3 anos com Spark", "Ciência da Computação", "Airflow", "dbt"]
        assert job.responsibilities == ["Construir pipelines"]
        assert job.experience_requirement == "3 anos com Spark"
        assert job.url == "https://vagas.example.com/1"
        assert job.summary == "DataCorp • Engenheira de Dados • Python, SQL"

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_unknown_enum_values_become_none(self, mock_llm, remote):
        mock_llm.return_value = json.dumps({"vaga": {"titulo": "Dev", "senioridade": "trainee"}})
        job = remote.extract_job_from_text("Dev")
        assert job.seniority is None
        assert job.company == "Empresa"

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_non_json_answer_raises(self, mock_llm, remote):
        mock_llm.return_value = "Desculpe, não consigo ajudar."
        with pytest.raises(ModelError):
            remote.extract_job_from_text(JOB_TEXT)

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_profile_placeholder_skips_llm(self, mock_llm, remote):
        assert remote.extract_profile("[PDF Content] cv.pdf - Conteúdo extraído do PDF.") is None
        mock_llm.assert_not_called()

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_profile_empty_values_become_none(self, mock_llm, remote):
        mock_llm.return_value = json.dumps({
            "fullName": "Maria Souza",
            "email": "",
            "skills": ["Python", " "],
            "certifications": [],
            "projects": None,
        })
        profile = remote.extract_profile(RESUME_TEXT)

        assert profile.full_name == "Maria Souza"
        assert profile.email is None
        assert profile.skills == ["Python"]
        assert profile.certifications is None
        assert profile.projects is None

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_compatibility_answer_is_normalized(self, mock_llm, remote):
        mock_llm.return_value = json.dumps({"score": 182.4, "strengths": ["Boa base em React"]})
        job = JobPosting(skills=["React", "Python"])

        result = remote.score_compatibility("React", job)

        assert result.score == 100
        assert result.strengths[0] == "Boa base em React"
        assert len(result.strengths) == 3
        assert len(result.weaknesses) == 2
        assert result.missing_skills == ["Python"]

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_compatibility_without_score_raises(self, mock_llm, remote):
        mock_llm.return_value = json.dumps({"strengths": []})
        with pytest.raises(ModelError):
            remote.score_compatibility("React", JobPosting())


class TestFallbackExtractionStrategy:
    """Remote failures are answered by the local strategy"""

    @pytest.mark.parametrize("error", [
        ExternalServiceError("LLM API error: 500", service_name="llm", status_code=500),
        ModelError("Empty response from LLM"),
        requests.Timeout("timed out"),
        ValueError("bad payload"),
    ])
    def test_falls_back_on_error(self, error, local_strategy):
        remote = Mock()
        remote.extract_job_from_text.side_effect = error
        strategy = FallbackExtractionStrategy(remote, local_strategy)

        assert strategy.extract_job_from_text(JOB_TEXT) == extract_job_from_text(JOB_TEXT)

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_remote_result_is_used_when_available(self, mock_llm, remote, local_strategy):
        mock_llm.return_value = "Currículo reescrito"
        strategy = FallbackExtractionStrategy(remote, local_strategy)
        job = JobPosting(title="Dev")
        assessment = local_strategy.score_compatibility("", job)

        assert strategy.rewrite_resume(None, job, assessment) == "Currículo reescrito"

    @patch('resume_optimizer.services.strategies.llm_generate')
    def test_rewrite_falls_back_to_template(self, mock_llm, remote, local_strategy):
        mock_llm.side_effect = ExternalServiceError("LLM request timed out after 20s", service_name="llm")
        strategy = FallbackExtractionStrategy(remote, local_strategy)
        job = JobPosting(title="Dev")
        assessment = local_strategy.score_compatibility("", job)

        content = strategy.rewrite_resume(None, job, assessment)
        assert content.startswith("Candidato\n")

    def test_unexpected_errors_propagate(self, local_strategy):
        remote = Mock()
        remote.extract_profile.side_effect = RuntimeError("bug")
        strategy = FallbackExtractionStrategy(remote, local_strategy)

        with pytest.raises(RuntimeError):
            strategy.extract_profile(RESUME_TEXT)

    def test_fallback_decision_is_logged(self, local_strategy, caplog):
        remote = Mock()
        remote.extract_profile.side_effect = ModelError("Empty response from LLM")
        strategy = FallbackExtractionStrategy(remote, local_strategy)

        with caplog.at_level("WARNING", logger=FALLBACK_LOGGER):
            strategy.extract_profile(RESUME_TEXT)

        records = [r for r in caplog.records if r.name == FALLBACK_LOGGER]
        assert len(records) == 1
        assert records[0].operation == "extract_profile"
        assert records[0].error_type == "ModelError"
