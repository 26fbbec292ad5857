import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# Captured job text is capped before it reaches the generator prompt
MAX_JOB_CHARS = 12000


def parse_jd(text: str, max_chars: int = MAX_JOB_CHARS) -> str:
    """Clean, normalize and truncate job posting text."""
    text = re.sub(r"[ \t]+", " ", text)
    lines = [line.strip() for line in text.splitlines()]
    text = re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()
    if len(text) > max_chars:
        logger.info("Truncating job text from %d to %d chars", len(text), max_chars)
        text = text[:max_chars]
    return text


def load_jd_file(file_path: str | Path, max_chars: int = MAX_JOB_CHARS) -> str:
    """Load a job posting from a text file."""
    return parse_jd(Path(file_path).read_text(encoding="utf-8"), max_chars=max_chars)
