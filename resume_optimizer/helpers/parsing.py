import base64
import binascii
import re
from pathlib import Path

from bs4 import BeautifulSoup

from resume_optimizer.utils.exceptions import ValidationError

BLOCK_TAGS = ["div", "p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "section", "article"]

# Fetched pages shorter than this (after sanitizing) are not worth extracting
MIN_CONTENT_LENGTH = 100

# Binary formats are not parsed; the converter emits a stub carrying these markers
PDF_PLACEHOLDER = (
    "[PDF Content] {name} - Conteúdo extraído do PDF. Em uma implementação real, "
    "seria usada uma biblioteca de leitura de PDF para extrair o texto completo."
)
DOCX_PLACEHOLDER = (
    "[DOCX Content] {name} - Conteúdo extraído do DOCX. Em uma implementação real, "
    "seria usada uma biblioteca de leitura de DOCX para extrair o texto completo."
)
PLACEHOLDER_MARKERS = (
    "[PDF Content]",
    "[DOCX Content]",
    "Conteúdo extraído do PDF",
    "Conteúdo extraído do DOCX",
    "Em uma implementação real",
)


def sanitize_html(html: str) -> str:
    """Turn a job posting page into plain text, one block element per line."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before("\n")
        block.insert_after("\n")

    text = soup.get_text(" ")
    text = re.sub(r"[^\S\n]+", " ", text)
    text = re.sub(r" ?\n ?", "\n", text)
    text = re.sub(r"\n{2,}", "\n", text)
    return text.strip()


def truncate(text: str, limit: int = 500) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def contains_placeholder(text: str) -> bool:
    return any(marker in text for marker in PLACEHOLDER_MARKERS)


def decode_base64_upload(b64_string: str) -> bytes:
    try:
        return base64.b64decode(b64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 resume content: {e}", field="base64_content", cause=e)


def extract_text_from_upload(filename: str, data: bytes) -> str:
    """Convert an uploaded resume to text. PDF and DOCX yield placeholder text."""
    name = Path(filename).name
    ext = Path(filename).suffix.lower()
    if ext == ".pdf":
        return PDF_PLACEHOLDER.format(name=name)
    if ext in (".docx", ".doc"):
        return DOCX_PLACEHOLDER.format(name=name)
    return data.decode("utf-8", errors="ignore")
