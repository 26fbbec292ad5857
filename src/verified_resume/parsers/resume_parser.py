import re
from pathlib import Path

# Contact-line icons common in exported resumes (email, phone, pin, link, globe...)
ICON_PATTERN = (
    r"[\U0001f4e7\U0001f4de\U0001f4cd\U0001f4bc\U0001f4c5\U0001f393"
    r"\U0001f3e2\U0001f517\U0001f310\U0001f4f1\u260e\u2709]\s*"
)

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")


def parse_resume(file_path: str | Path) -> str:
    """Read the original resume (PDF, DOCX, TXT, MD) as clean plain text.

    This text is the ground truth every tailored claim is verified against.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        raw = _parse_pdf(path)
    elif suffix == ".docx":
        raw = _parse_docx(path)
    elif suffix in (".txt", ".md"):
        raw = path.read_text(encoding="utf-8")
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")
    return clean_resume_text(raw)


def clean_resume_text(text: str) -> str:
    """Strip export artifacts without touching the wording.

    Removes BOM/zero-width characters and contact icons, normalizes bullet
    glyphs to "- ", collapses runs of spaces and excess blank lines.
    """
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = re.sub(ICON_PATTERN, "", text)

    text = re.sub(r"^(\s*)[●•◦◆■▪★○]\s*", r"\1- ", text, flags=re.MULTILINE)

    lines = []
    for line in text.splitlines():
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)].replace("\t", "    ")
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).rstrip()
        lines.append(f"{indent}{stripped}" if stripped else "")
    text = "\n".join(lines)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_pdf(path: Path) -> str:
    import fitz  # pymupdf

    doc = fitz.open(str(path))
    try:
        return "\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
