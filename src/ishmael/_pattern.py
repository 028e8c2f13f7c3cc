"""KWIC pattern compilation: one matcher per value type."""

from __future__ import annotations

import bisect
import fnmatch
import re
from typing import Sequence

from ._errors import InputError, PatternError
from ._phrase import PhraseMatcher
from ._segment import compile_regex
from ._types import ValueType

# A regex that can only match across tokens: literal space or \s
_SPANS_TOKENS_RE = re.compile(r" |\\s")

Match = tuple[int, int, str]  # (start, end exclusive, pattern)


class FixedMatcher:
    """Exact token (or token phrase) equality."""

    __slots__ = ("_phrases", "_sources")

    def __init__(self, patterns: list[str], case_insensitive: bool) -> None:
        self._phrases = PhraseMatcher(patterns, case_insensitive=case_insensitive)
        self._sources = [" ".join(p) for p in self._phrases.phrases]

    def find(self, tokens: Sequence[str]) -> list[Match]:
        return [
            (start, end, self._sources[idx])
            for start, end, idx in self._phrases.find_all(tokens)
        ]


class TokenRegexMatcher:
    """Per-token regexes; a pattern with several parts matches consecutive tokens.

    Glob patterns are translated to anchored regexes and use this matcher
    with ``fullmatch``; regex patterns use ``search``.
    """

    __slots__ = ("_entries", "_anchored")

    def __init__(
        self, entries: list[tuple[str, tuple[re.Pattern[str], ...]]], anchored: bool
    ) -> None:
        self._entries = entries
        self._anchored = anchored

    def _hit(self, regex: re.Pattern[str], token: str) -> bool:
        if self._anchored:
            return regex.fullmatch(token) is not None
        return regex.search(token) is not None

    def find(self, tokens: Sequence[str]) -> list[Match]:
        matches: list[Match] = []
        n = len(tokens)
        for start in range(n):
            for source, parts in self._entries:
                k = len(parts)
                if start + k > n:
                    continue
                if all(self._hit(parts[j], tokens[start + j]) for j in range(k)):
                    matches.append((start, start + k, source))
        return matches


class SpanningRegexMatcher:
    """Regexes matched against the space-joined token stream.

    A match begins at the start of a token and covers every token it
    touches, so ``CHAPTER \\d`` finds ``["CHAPTER", "12"]`` just as a
    per-token ``\\d`` finds ``"12"``.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: list[tuple[str, re.Pattern[str]]]) -> None:
        self._entries = entries

    def find(self, tokens: Sequence[str]) -> list[Match]:
        starts: list[int] = []
        offset = 0
        for tok in tokens:
            starts.append(offset)
            offset += len(tok) + 1
        joined = " ".join(tokens)

        matches: list[Match] = []
        for i, char_start in enumerate(starts):
            for source, regex in self._entries:
                m = regex.match(joined, char_start)
                if m is None or m.end() <= char_start:
                    continue
                # Token holding the last matched character, or the token
                # before it when that character is a separating space
                end = bisect.bisect_right(starts, m.end() - 1)
                matches.append((i, end, source))
        return matches


class CompositeMatcher:
    __slots__ = ("_matchers",)

    def __init__(self, matchers: list) -> None:
        self._matchers = matchers

    def find(self, tokens: Sequence[str]) -> list[Match]:
        matches: list[Match] = []
        for matcher in self._matchers:
            matches.extend(matcher.find(tokens))
        matches.sort(key=lambda m: m[0])
        return matches


def _check_patterns(patterns: str | Sequence[str]) -> list[str]:
    if isinstance(patterns, str):
        patterns = [patterns]
    if not isinstance(patterns, Sequence) or not patterns:
        raise InputError("pattern must be a str or a non-empty list of str")
    out = []
    for p in patterns:
        if not isinstance(p, str):
            raise InputError(f"expected pattern as str, got {type(p).__name__}")
        if not p.strip():
            raise InputError("pattern must not be empty")
        out.append(p)
    return out


def _compile_glob(part: str, flags: int) -> re.Pattern[str]:
    try:
        return re.compile(fnmatch.translate(part), flags)
    except re.error as e:
        raise PatternError(f"invalid glob {part!r}: {e}") from e


def compile_matcher(
    patterns: str | Sequence[str],
    value_type: ValueType | str = ValueType.FIXED,
    case_insensitive: bool = False,
):
    """Build the matcher for ``patterns`` once, according to ``value_type``."""
    kind = ValueType.parse(value_type)
    sources = _check_patterns(patterns)
    flags = re.IGNORECASE if case_insensitive else 0

    if kind is ValueType.FIXED:
        return FixedMatcher(sources, case_insensitive)

    if kind is ValueType.GLOB:
        entries = [
            (p, tuple(_compile_glob(part, flags) for part in p.split()))
            for p in sources
        ]
        return TokenRegexMatcher(entries, anchored=True)

    per_token = [
        (p, (compile_regex(p, flags),))
        for p in sources if not _SPANS_TOKENS_RE.search(p)
    ]
    spanning = [
        (p, compile_regex(p, flags))
        for p in sources if _SPANS_TOKENS_RE.search(p)
    ]
    if not spanning:
        return TokenRegexMatcher(per_token, anchored=False)
    if not per_token:
        return SpanningRegexMatcher(spanning)
    return CompositeMatcher([
        TokenRegexMatcher(per_token, anchored=False),
        SpanningRegexMatcher(spanning),
    ])
