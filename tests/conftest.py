import os

os.environ["ENVIRONMENT"] = "testing"
os.environ["EXTRACTION_POLICY"] = "local"

import pytest
from fastapi.testclient import TestClient

from resume_optimizer.models.settings import AppSettings, get_settings
from resume_optimizer.services.repositories import Repositories, Repository, get_repositories
from resume_optimizer.services.strategies import LocalExtractionStrategy, get_strategy

JOB_TEXT = """Desenvolvedor Full Stack Pleno
Empresa: Tech Solutions
Local: São Paulo - Trabalho remoto

Requisitos:
• Experiência com React e Node.js
- Conhecimento em PostgreSQL
* Git

Benefícios:
• Vale refeição
• Plano de saúde
"""

RESUME_TEXT = """Maria Souza
maria.souza@email.com | (21) 3333-4444
Rio de Janeiro, RJ

Experiência Profissional
Desenvolvedora Python na Acme (2019-2023)

Formação
Bacharelado em Ciência da Computação - UFRJ

Habilidades
Python, Django, Docker, Git

Certificações
- AWS Certified Developer
- Scrum Master (PSM I)

Projetos
- Plataforma de recomendação de vagas
"""


class InMemoryRepository(Repository):
    def __init__(self, id_field):
        self.id_field = id_field
        self.records = []

    async def save(self, record):
        self.records.append(record)
        return record

    async def get_all(self, user_id):
        mine = [r for r in self.records if r.user_id == user_id]
        return sorted(mine, key=lambda r: r.created_at, reverse=True)

    async def get_by_id(self, user_id, record_id):
        for r in self.records:
            if r.user_id == user_id and getattr(r, self.id_field) == record_id:
                return r
        return None


class InMemoryProfileRepository(InMemoryRepository):
    def __init__(self):
        super().__init__("user_id")

    async def save(self, record):
        self.records = [r for r in self.records if r.user_id != record.user_id]
        self.records.append(record)
        return record

    async def get_for_user(self, user_id):
        return await self.get_by_id(user_id, user_id)


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def repos():
    return Repositories(
        jobs=InMemoryRepository("job_id"),
        resumes=InMemoryRepository("resume_id"),
        analyses=InMemoryRepository("analysis_id"),
        optimized=InMemoryRepository("optimized_id"),
        profiles=InMemoryProfileRepository(),
    )


@pytest.fixture
def local_strategy(settings):
    return LocalExtractionStrategy(settings)


@pytest.fixture
def test_app(repos, local_strategy, settings):
    from resume_optimizer.main import app

    app.dependency_overrides[get_repositories] = lambda: repos
    app.dependency_overrides[get_strategy] = lambda: local_strategy
    app.dependency_overrides[get_settings] = lambda: settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    return TestClient(test_app)
