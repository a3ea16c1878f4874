from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Callable, List, Union

from .datatypes import TextUnit

logger = logging.getLogger(__name__)

SentenceSplitter = Callable[[TextUnit], List[str]]

SUPPORTED_EXTENSIONS = (".txt", ".md", ".rtf")

_SENT_RE = re.compile(r"(?<=[.!?])\s+")
_WS_RE = re.compile(r"\s+")

def normalize_text(text: str, lowercase: bool = False) -> str:
    # collapse runs of whitespace so line breaks do not create spurious n-grams
    text = _WS_RE.sub(" ", text).strip()
    return text.lower() if lowercase else text

def split_sentences(unit: Union[TextUnit, str]) -> List[str]:
    """Default sentence splitter: break after . ! ? followed by whitespace."""
    text = unit.text if isinstance(unit, TextUnit) else unit
    text = normalize_text(text)
    if not text:
        return []
    return [p.strip() for p in _SENT_RE.split(text) if p.strip()]

def extract_rtf_text(rtf_content: str) -> str:
    """Extract plain text from RTF content."""
    text = re.sub(r'\\\*.*?;', '', rtf_content)
    text = re.sub(r'\\[a-z]+-?\d* ?', '', text)
    text = re.sub(r'\\[^a-z]', '', text)
    text = re.sub(r'[{}]', '', text)
    return _WS_RE.sub(' ', text).strip()

def extract_markdown_text(md_content: str) -> str:
    """Extract plain text from Markdown content."""
    text = re.sub(r'```.*?```', '', md_content, flags=re.DOTALL)
    text = re.sub(r'`([^`]+)`', r'\1', text)
    text = re.sub(r'^#{1,6}\s+', '', text, flags=re.MULTILINE)
    text = re.sub(r'\*{1,2}(.*?)\*{1,2}', r'\1', text)
    text = re.sub(r'_{1,2}(.*?)_{1,2}', r'\1', text)
    text = re.sub(r'\[([^\]]+)\]\([^)]+\)', r'\1', text)
    text = re.sub(r'^-{3,}$', '', text, flags=re.MULTILINE)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()

def text_from_content(name: str, content: str) -> str:
    suffix = Path(name).suffix.lower()
    if suffix == ".rtf":
        return extract_rtf_text(content)
    if suffix == ".md":
        return extract_markdown_text(content)
    return content

def read_document(path: Union[str, Path]) -> str:
    path = Path(path)
    content = path.read_text(encoding="utf-8", errors="replace")
    return text_from_content(path.name, content)

def list_documents(directory: Union[str, Path]) -> List[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        raise ValueError(f"Not a directory: {directory}")
    files = sorted(p for p in directory.iterdir()
                   if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS)
    logger.debug("Found %d documents in %s", len(files), directory)
    return files

def load_documents(directory: Union[str, Path]) -> List[TextUnit]:
    """Read every supported file of a directory into text units, in file-name order."""
    return [TextUnit(uid=i, text=read_document(p), source=str(p))
            for i, p in enumerate(list_documents(directory))]
