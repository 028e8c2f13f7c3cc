"""Keyword-in-context search and lexical dispersion data."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Sequence

from ._errors import InputError
from ._pattern import compile_matcher
from ._tokenizer import tokens_with_policy
from ._types import (
    Dispersion,
    DispersionPoint,
    KwicMatch,
    TokenPolicy,
    ValueType,
)

if TYPE_CHECKING:
    from ._corpus import CorpusLike

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 5

ABSOLUTE = "absolute"
RELATIVE = "relative"
_X_LABELS = {
    ABSOLUTE: "Token index",
    RELATIVE: "Relative token index",
}


class KwicResult:
    """Ordered KWIC matches plus the token count of every searched document."""

    __slots__ = ("_matches", "_doc_lengths")

    def __init__(
        self, matches: list[KwicMatch], doc_lengths: dict[str, int]
    ) -> None:
        self._matches = matches
        self._doc_lengths = doc_lengths

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[KwicMatch]:
        return iter(self._matches)

    def __getitem__(self, i: int) -> KwicMatch:
        return self._matches[i]

    def __repr__(self) -> str:
        return (
            f"KwicResult({len(self._matches)} matches in "
            f"{len(self._doc_lengths)} documents)"
        )

    @property
    def matches(self) -> list[KwicMatch]:
        return list(self._matches)

    @property
    def doc_lengths(self) -> dict[str, int]:
        return dict(self._doc_lengths)

    @property
    def doc_ids(self) -> list[str]:
        return list(self._doc_lengths)

    @property
    def is_multi_document(self) -> bool:
        """True when more than one document was searched.

        Consumers plot single-document results on absolute token positions
        and multi-document results on positions relative to document length.
        """
        return len(self._doc_lengths) > 1

    def positions(self, doc_id: str | None = None) -> list[int]:
        return [
            m.position for m in self._matches
            if doc_id is None or m.doc_id == doc_id
        ]

    def dispersion(self, scale: str | None = None) -> Dispersion:
        return dispersion(self, scale=scale)


def _check_window(window: object) -> int:
    if isinstance(window, bool) or not isinstance(window, int) or window < 0:
        raise InputError(f"window must be a non-negative int, got {window!r}")
    return window


def kwic(
    x: CorpusLike,
    pattern: str | Sequence[str],
    value_type: ValueType | str = ValueType.FIXED,
    window: int = DEFAULT_WINDOW,
    case_insensitive: bool = False,
    remove_punct: bool = False,
    lowercase: bool = False,
    keep_acronyms: bool = False,
) -> KwicResult:
    """Locate keywords and return each match with its surrounding tokens.

    Args:
        x: A text, Text, Corpus, list of texts, mapping of doc id to text,
            or a list of pre-tokenized ``Tokens``.
        pattern: One pattern or a list of patterns.
        value_type: ``"fixed"`` for exact tokens, ``"glob"`` for ``*``/``?``
            wildcards over whole tokens, ``"regex"`` for regular expressions
            searched within tokens. In fixed and glob patterns any run of
            whitespace (spaces, tabs, newlines) separates the parts of a
            phrase over consecutive tokens. A regex containing a space or
            ``\\s`` is matched across tokens and covers every token it
            touches.
        window: Number of context tokens on each side.
        case_insensitive: Compare ignoring case.
        remove_punct: Tokenization policy applied before searching.
        lowercase: Tokenization policy applied before searching.
        keep_acronyms: With ``lowercase``, leave all-caps words unchanged.

    Raises:
        InputError: On bad input types, an empty pattern or a bad window.
        PatternError: If a regex pattern does not compile.
    """
    window = _check_window(window)
    matcher = compile_matcher(pattern, value_type, case_insensitive)
    docs = tokens_with_policy(
        x,
        TokenPolicy(
            remove_punct=remove_punct,
            lowercase=lowercase,
            keep_acronyms=keep_acronyms,
        ),
    )

    matches: list[KwicMatch] = []
    doc_lengths: dict[str, int] = {}
    for doc in docs:
        toks = doc.tokens
        doc_lengths[doc.doc_id] = len(toks)
        for start, end, source in matcher.find(toks):
            matches.append(KwicMatch(
                doc_id=doc.doc_id,
                position=start,
                end=end - 1,
                pre=toks[max(0, start - window):start],
                keyword=toks[start:end],
                post=toks[end:end + window],
                pattern=source,
            ))

    logger.debug(
        "kwic %r (%s) found %d matches in %d documents",
        pattern, ValueType.parse(value_type).value, len(matches), len(docs),
    )
    return KwicResult(matches, doc_lengths)


def dispersion(*results: KwicResult, scale: str | None = None) -> Dispersion:
    """Keyword positions for a lexical dispersion plot.

    Combines one or more KWIC results (one per keyword, typically). With
    ``scale=None`` the scale is absolute when a single document was searched
    and relative otherwise; ``"absolute"`` or ``"relative"`` override it.
    Relative positions are token index divided by document length.
    """
    if not results:
        raise InputError("dispersion needs at least one KWIC result")
    for r in results:
        if not isinstance(r, KwicResult):
            raise InputError(f"expected KwicResult, got {type(r).__name__}")

    doc_lengths: dict[str, int] = {}
    for r in results:
        for doc_id, n in r.doc_lengths.items():
            doc_lengths.setdefault(doc_id, n)

    if scale is None:
        scale = RELATIVE if len(doc_lengths) > 1 else ABSOLUTE
    elif scale not in _X_LABELS:
        raise InputError(
            f"scale must be {ABSOLUTE!r} or {RELATIVE!r}, got {scale!r}"
        )

    points: list[DispersionPoint] = []
    for r in results:
        for m in r:
            if scale == RELATIVE:
                position = m.position / doc_lengths[m.doc_id]
            else:
                position = float(m.position)
            points.append(DispersionPoint(m.doc_id, m.pattern, position))

    return Dispersion(
        scale=scale,
        x_label=_X_LABELS[scale],
        doc_ids=list(doc_lengths),
        points=points,
    )
