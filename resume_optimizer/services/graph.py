from typing import Optional, TypedDict

from langgraph.graph import END, StateGraph

from resume_optimizer.models.models import (
    CompatibilityAssessment,
    JobConfidence,
    JobPosting,
    ResumeProfile,
)
from resume_optimizer.models.settings import get_settings
from resume_optimizer.services.confidence import score_job_confidence
from resume_optimizer.services.fetcher import fetch_job_text
from resume_optimizer.services.strategies import ExtractionStrategy
from resume_optimizer.utils.exceptions import ValidationError
from resume_optimizer.utils.logging_config import get_logger

logger = get_logger("graph")


class PipelineState(TypedDict, total=False):
    job_text: Optional[str]
    url: Optional[str]
    resume_text: str
    job: JobPosting
    confidence: JobConfidence
    profile: Optional[ResumeProfile]
    assessment: CompatibilityAssessment
    optimized: str


def build_graph(strategy: ExtractionStrategy):
    """extract_job -> extract_profile -> score -> render, all through one strategy."""

    def node_extract_job(state: PipelineState):
        url = state.get("url")
        if url:
            url, text = fetch_job_text(url)
            job = strategy.extract_job_from_html(text, url)
        elif state.get("job_text") and state["job_text"].strip():
            job = strategy.extract_job_from_text(state["job_text"])
        else:
            raise ValidationError("Informe o texto da vaga ou um link", field="job_text")
        confidence = score_job_confidence(job, get_settings().confidence_weights)
        logger.info(f"Job extracted: '{job.title}' (confidence {confidence.score})")
        return {"job": job, "confidence": confidence}  # delta

    def node_extract_profile(state: PipelineState):
        profile = strategy.extract_profile(state.get("resume_text", ""))
        if profile is None:
            logger.warning("Resume text is placeholder content; continuing without a profile")
        return {"profile": profile}

    def node_score(state: PipelineState):
        return {"assessment": strategy.score_compatibility(state.get("resume_text", ""), state["job"])}

    def node_render(state: PipelineState):
        return {"optimized": strategy.rewrite_resume(state.get("profile"), state["job"], state["assessment"])}

    g = StateGraph(PipelineState)
    g.add_node("extract_job", node_extract_job)
    g.add_node("extract_profile", node_extract_profile)
    g.add_node("score", node_score)
    g.add_node("render", node_render)
    g.set_entry_point("extract_job")
    g.add_edge("extract_job", "extract_profile")
    g.add_edge("extract_profile", "score")
    g.add_edge("score", "render")
    g.add_edge("render", END)
    return g.compile()


def run_pipeline(strategy: ExtractionStrategy, resume_text: str, job_text: str = None, url: str = None) -> PipelineState:
    graph = build_graph(strategy)
    return graph.invoke({"resume_text": resume_text, "job_text": job_text, "url": url})
