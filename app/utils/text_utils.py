# app/utils/text_utils.py
import re

_WHITESPACE_PATTERN = re.compile(r"\s+")
_EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")
# Any whitespace character except a newline
_HORIZONTAL_WHITESPACE_PATTERN = re.compile(r"[^\S\n]{2,}")


def count_words(text: str) -> int:
    """
    Count the pieces produced by splitting text on runs of whitespace.

    Leading or trailing whitespace yields an empty piece that is counted,
    and an empty string counts as one piece.
    """
    return len(_WHITESPACE_PATTERN.split(text))


def clean_text(text: str) -> str:
    """
    Clean extracted text before it is handed to AI ingestion.

    Steps, in order:
    1. Normalize CRLF and lone CR line endings to LF
    2. Cap blank-line runs at a single empty line
    3. Collapse runs of horizontal whitespace to one space
    4. Trim leading and trailing whitespace

    Args:
        text: Raw extracted text

    Returns:
        Normalized text
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _EXCESS_NEWLINES_PATTERN.sub("\n\n", text)
    text = _HORIZONTAL_WHITESPACE_PATTERN.sub(" ", text)
    return text.strip()
