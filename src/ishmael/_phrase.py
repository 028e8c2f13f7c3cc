"""Multi-word phrase scan (Aho-Corasick) over token sequences."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import ahocorasick

from ._errors import InputError
from ._types import Tokens

logger = logging.getLogger(__name__)

# Joins tokens for the automaton; cannot occur inside a token produced by
# the tokenizer.
_SEP = "\x1f"


class PhraseMatcher:
    """Find fixed token phrases in token sequences.

    Phrases are given as whitespace-separated strings (``"sperm whale"``) or
    as token sequences. Matches are always aligned to whole tokens.
    """

    __slots__ = ("_automaton", "_phrases", "_key_lens", "_case_insensitive")

    def __init__(
        self,
        phrases: Iterable[str | Sequence[str]],
        case_insensitive: bool = False,
    ) -> None:
        self._case_insensitive = case_insensitive
        self._phrases: list[tuple[str, ...]] = []
        self._key_lens: list[int] = []
        self._automaton = ahocorasick.Automaton()
        seen: set[str] = set()
        for phrase in phrases:
            parts = _split_phrase(phrase)
            key = _SEP.join(self._norm(p) for p in parts)
            if key in seen:
                continue
            seen.add(key)
            self._automaton.add_word(key, len(self._phrases))
            self._phrases.append(parts)
            self._key_lens.append(len(key))
        if self._phrases:
            self._automaton.make_automaton()

    def _norm(self, token: str) -> str:
        return token.casefold() if self._case_insensitive else token

    @property
    def phrases(self) -> list[tuple[str, ...]]:
        return list(self._phrases)

    def find_all(self, tokens: Sequence[str]) -> list[tuple[int, int, int]]:
        """All token-aligned matches as (start, end, phrase_idx).

        ``end`` is exclusive. Matches may overlap; they are sorted by start
        position, longest first.
        """
        if not self._phrases or not tokens:
            return []

        normed = [self._norm(t) for t in tokens]
        starts: dict[int, int] = {}
        ends: dict[int, int] = {}
        offset = 0
        for i, tok in enumerate(normed):
            starts[offset] = i
            offset += len(tok)
            ends[offset] = i + 1
            offset += len(_SEP)
        haystack = _SEP.join(normed)

        matches: list[tuple[int, int, int]] = []
        for end_inclusive, idx in self._automaton.iter(haystack):
            char_end = end_inclusive + 1
            char_start = char_end - self._key_lens[idx]
            if char_start in starts and char_end in ends:
                matches.append((starts[char_start], ends[char_end], idx))

        matches.sort(key=lambda m: (m[0], -(m[1] - m[0])))
        return matches

    def find_longest(
        self, tokens: Sequence[str]
    ) -> list[tuple[int, int, int]]:
        """Leftmost-longest non-overlapping matches."""
        selected: list[tuple[int, int, int]] = []
        last_end = -1
        for start, end, idx in self.find_all(tokens):
            if start >= last_end:
                selected.append((start, end, idx))
                last_end = end
        return selected


def _split_phrase(phrase: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(phrase, str):
        parts = tuple(phrase.split())
    elif isinstance(phrase, Sequence) and all(isinstance(p, str) for p in phrase):
        parts = tuple(phrase)
    else:
        raise InputError(f"expected phrase as str, got {phrase!r}")
    if not parts or not all(parts):
        raise InputError(f"empty phrase {phrase!r}")
    return parts


def _compound_one(
    tokens: Sequence[str], matcher: PhraseMatcher, concatenator: str
) -> list[str]:
    out: list[str] = []
    pos = 0
    for start, end, _ in matcher.find_longest(tokens):
        out.extend(tokens[pos:start])
        out.append(concatenator.join(tokens[start:end]))
        pos = end
    out.extend(tokens[pos:])
    return out


def compound(
    x: Sequence[str] | Tokens | Sequence[Tokens],
    phrases: Iterable[str | Sequence[str]],
    concatenator: str = "_",
    case_insensitive: bool = False,
):
    """Join each occurrence of a multi-word phrase into a single token.

    Where phrases overlap, the leftmost match wins, and of matches starting
    at the same token the longest wins. The joined token keeps the original
    spelling of its parts: ``["sperm", "whale"]`` becomes ``"sperm_whale"``.

    Returns the same shape as ``x``: a token list, a Tokens, or a list of
    Tokens.
    """
    matcher = PhraseMatcher(phrases, case_insensitive=case_insensitive)
    if isinstance(x, Tokens):
        return Tokens(x.doc_id, tuple(_compound_one(x.tokens, matcher, concatenator)))
    if isinstance(x, str) or not isinstance(x, Sequence):
        raise InputError(
            f"expected tokens or a list of Tokens, got {type(x).__name__}"
        )
    if x and all(isinstance(t, Tokens) for t in x):
        docs = [
            Tokens(t.doc_id, tuple(_compound_one(t.tokens, matcher, concatenator)))
            for t in x
        ]
        logger.debug(
            "compounded %d phrases across %d documents",
            len(matcher.phrases), len(docs),
        )
        return docs
    if not all(isinstance(t, str) for t in x):
        raise InputError("expected a sequence of str tokens")
    return _compound_one(x, matcher, concatenator)
