from typing import Optional, Tuple
from urllib.parse import urlparse

import requests

from resume_optimizer.helpers.parsing import MIN_CONTENT_LENGTH, sanitize_html
from resume_optimizer.models.settings import get_settings
from resume_optimizer.utils.exceptions import (
    ExternalServiceError,
    InsufficientContentError,
    ValidationError,
)
from resume_optimizer.utils.logging_config import get_logger, log_remote_call

logger = get_logger("fetcher")

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
}


def source_domain(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return urlparse(url).netloc or None


def validate_url(url: str) -> str:
    parsed = urlparse((url or "").strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("URL inválida", field="url", value=url)
    return parsed.geturl()


@log_remote_call("job_page")
def fetch_job_page(url: str, timeout: float = None) -> str:
    """Download a job posting page and return its raw HTML."""
    url = validate_url(url)
    timeout = timeout or get_settings().fetch_timeout
    try:
        resp = requests.get(url, headers=BROWSER_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.Timeout as e:
        raise ExternalServiceError(
            "Timeout ao acessar a URL. Tente colar o texto da vaga.",
            service_name="job_page",
            cause=e,
        )
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise ExternalServiceError(
            f"Erro ao acessar a URL: {status}", service_name="job_page", status_code=status, cause=e
        )
    except requests.RequestException as e:
        raise ExternalServiceError(f"Erro ao acessar a URL: {e}", service_name="job_page", cause=e)
    logger.info(f"Fetched {len(resp.text)} characters from {source_domain(url)}")
    return resp.text


def fetch_job_text(url: str, timeout: float = None) -> Tuple[str, str]:
    """Fetch and sanitize a job page. Returns (normalized url, plain text)."""
    url = validate_url(url)
    text = sanitize_html(fetch_job_page(url, timeout))
    if len(text) < MIN_CONTENT_LENGTH:
        raise InsufficientContentError(url=url, length=len(text))
    return url, text
