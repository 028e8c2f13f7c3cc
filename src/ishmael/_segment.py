"""Split a text into ordered segments at a regex delimiter."""

from __future__ import annotations

import logging
import re

from ._errors import InputError, PatternError
from ._types import Text

logger = logging.getLogger(__name__)


def compile_regex(pattern: str | re.Pattern[str], flags: int = 0) -> re.Pattern[str]:
    """Compile a user-supplied regex, raising PatternError when malformed."""
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise InputError(
            f"expected pattern as str, got {type(pattern).__name__}"
        )
    if not pattern:
        raise InputError("pattern must not be empty")
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(f"invalid regex {pattern!r}: {e}") from e


def segment(
    text: str | Text,
    pattern: str | re.Pattern[str],
    keep_delimiter: bool = False,
) -> list[Text]:
    """Split ``text`` at every match of the ``pattern`` delimiter.

    Segment 0 holds whatever precedes the first match (possibly empty);
    segment n holds the content following the n-th match. With no match
    the single segment is the whole text. Each segment records the
    delimiter that opened it, so joining ``delimiter + content`` over all
    segments gives back the input.

    Args:
        text: A string or a ``Text``. Plain strings get the doc id ``text1``.
        pattern: Delimiter regex, e.g. ``r"CHAPTER\\s\\d+"``.
        keep_delimiter: Prefix each segment's content with its delimiter.

    Raises:
        InputError: If ``text`` is not a string or Text.
        PatternError: If ``pattern`` is not a valid regex.
    """
    if isinstance(text, Text):
        doc_id, content = text.doc_id, text.content
    elif isinstance(text, str):
        doc_id, content = "text1", text
    else:
        raise InputError(f"expected text as str, got {type(text).__name__}")
    regex = compile_regex(pattern)

    # Zero-width matches cannot delimit anything
    delimiters = [m for m in regex.finditer(content) if m.end() > m.start()]

    bounds: list[tuple[str | None, int, int]] = []
    start, opened_by = 0, None
    for m in delimiters:
        bounds.append((opened_by, start, m.start()))
        opened_by, start = m.group(), m.end()
    bounds.append((opened_by, start, len(content)))

    segments: list[Text] = []
    for n, (delim, lo, hi) in enumerate(bounds):
        body = content[lo:hi]
        if keep_delimiter and delim is not None:
            body = delim + body
        segments.append(Text(
            doc_id=f"{doc_id}.{n}",
            content=body,
            delimiter=delim,
            parent=doc_id,
        ))

    logger.debug(
        "segmented %s into %d segments on %r",
        doc_id, len(segments), regex.pattern,
    )
    return segments
