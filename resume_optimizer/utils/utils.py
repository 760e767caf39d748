import json
from typing import Dict, List, Optional

import requests

from resume_optimizer.models.settings import LLMSettings, get_settings
from resume_optimizer.utils.exceptions import ConfigurationError, ExternalServiceError, ModelError
from resume_optimizer.utils.logging_config import get_logger, log_remote_call

logger = get_logger("llm")


@log_remote_call("llm")
def llm_generate(messages: List[Dict[str, str]], settings: Optional[LLMSettings] = None, temperature: float = None) -> str:
    """Send a chat-completions request and return the first choice's content."""
    settings = settings or get_settings().llm
    if not settings.is_configured:
        raise ConfigurationError("LLM API key is not configured", config_key="LLM_API_KEY")

    url = f"{settings.base_url}/chat/completions"
    try:
        resp = requests.post(
            url,
            headers={"Authorization": f"Bearer {settings.api_key}"},
            json={
                "model": settings.model_name,
                "messages": messages,
                "temperature": settings.temperature if temperature is None else temperature,
                "max_tokens": settings.max_tokens,
            },
            timeout=settings.timeout,
        )
        resp.raise_for_status()
    except requests.Timeout as e:
        raise ExternalServiceError(
            f"LLM request timed out after {settings.timeout}s", service_name="llm", cause=e
        )
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise ExternalServiceError(
            f"LLM API error: {status}", service_name="llm", status_code=status, cause=e
        )
    except requests.RequestException as e:
        raise ExternalServiceError(f"LLM request failed: {e}", service_name="llm", cause=e)

    try:
        content = resp.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise ModelError("Invalid response from LLM API", model_name=settings.model_name, cause=e)
    if not content or not content.strip():
        raise ModelError("Empty response from LLM", model_name=settings.model_name)
    logger.debug(f"LLM returned {len(content)} characters")
    return content


def safe_json(s: str, fallback: dict):
    try:
        # heuristics to find JSON inside
        start = s.find("{")
        end = s.rfind("}")
        if start >= 0 and end >= 0:
            return json.loads(s[start:end+1])
        return fallback
    except ValueError:
        return fallback
