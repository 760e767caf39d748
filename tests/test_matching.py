import pytest

from resume_optimizer.models.settings import CompatibilityWeights
from resume_optimizer.services.matching import (
    DEFAULT_IMPROVEMENTS,
    DEFAULT_STRENGTHS,
    DEFAULT_WEAKNESSES,
    score_compatibility,
    split_matches,
)


class TestScoreCompatibility:
    """Test cases for the keyword-overlap compatibility scorer"""

    def test_two_of_three_skills(self):
        result = score_compatibility(
            "Experiência com React e Node.js",
            "",
            skills=["React", "Node.js", "Python"],
        )

        assert result.score == 67
        assert "Experiência comprovada em React" in result.strengths
        assert "Experiência comprovada em Node.js" in result.strengths
        assert "Experiência em Python não evidenciada" in result.weaknesses
        assert result.matched_skills == ["React", "Node.js"]
        assert result.missing_skills == ["Python"]
        assert any("Python" in i for i in result.improvements)

    def test_baseline_without_structured_fields(self):
        assert score_compatibility("Qualquer currículo", "Qualquer vaga").score == 50

    def test_keyword_bonus(self):
        result = score_compatibility(
            "Tenho experiência e conhecimento em vendas",
            "Buscamos experiência comercial e conhecimento de CRM",
        )
        assert result.score == 60

    def test_keyword_must_appear_in_both_texts(self):
        assert score_compatibility("experiência", "").score == 50

    def test_weighted_blend(self):
        result = score_compatibility(
            "Python Docker Git",
            "",
            requirements=["python", "inglês fluente"],
            skills=["Python", "Docker", "AWS", "Git"],
        )
        # 100 * (0.6 * 3/4 + 0.4 * 1/2)
        assert result.score == 65

    def test_requirements_only(self):
        assert score_compatibility("Python", "", requirements=["python", "inglês fluente"]).score == 50

    def test_weights_are_configurable(self):
        weights = CompatibilityWeights(skill_weight=1.0, requirement_weight=0.0)
        result = score_compatibility(
            "Python Docker Git",
            "",
            requirements=["inglês fluente"],
            skills=["Python", "Docker", "AWS", "Git"],
            weights=weights,
        )
        assert result.score == 75

    def test_score_is_clamped(self):
        keywords = "experiência conhecimento habilidade projeto desenvolvimento"
        result = score_compatibility(f"React {keywords}", keywords, skills=["React"])
        assert result.score == 100

    def test_substring_matching_is_preserved(self):
        result = score_compatibility("JavaScript", "", skills=["Java"])
        assert result.score == 100
        assert result.matched_skills == ["Java"]

    def test_lists_are_padded(self):
        result = score_compatibility("React", "", skills=["React"])

        assert result.strengths[0] == "Experiência comprovada em React"
        assert len(result.strengths) == 3
        assert result.weaknesses == DEFAULT_WEAKNESSES
        assert result.improvements == DEFAULT_IMPROVEMENTS

    def test_lists_never_empty(self):
        result = score_compatibility("", "")
        assert result.strengths == DEFAULT_STRENGTHS
        assert len(result.weaknesses) >= 2
        assert len(result.improvements) >= 4

    @pytest.mark.parametrize("resume,description,requirements,skills", [
        ("", "", None, None),
        ("Python", "Python", ["Python"], ["Python"]),
        ("nada", "experiência", ["a", "b", "c"], ["x"]),
        ("React " * 50, "projeto " * 10, [], ["React", "Vue.js", "Angular"]),
    ])
    def test_score_is_integer_in_range(self, resume, description, requirements, skills):
        score = score_compatibility(resume, description, requirements, skills).score
        assert isinstance(score, int)
        assert 0 <= score <= 100

    def test_idempotent(self):
        args = ("Experiência com React", "Vaga React", ["React"], ["React", "Python"])
        assert score_compatibility(*args) == score_compatibility(*args)


class TestSplitMatches:

    def test_case_insensitive(self):
        assert split_matches(["PYTHON", "Go"], "python e rust") == (["PYTHON"], ["Go"])
