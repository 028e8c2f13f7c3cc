"""Word/punctuation tokenizer, case normalization and token filters."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import TYPE_CHECKING, Iterable, Sequence

import Stemmer

from ._corpus import as_texts
from ._errors import InputError
from ._types import TokenPolicy, Tokens

if TYPE_CHECKING:
    from ._corpus import CorpusLike

logger = logging.getLogger(__name__)

# A word is a run of letters and digits (underscore is punctuation);
# apostrophes between them stay inside the word. Any other non-space
# character is a token of its own.
_WORD = r"[^\W_]+(?:['’][^\W_]+)*"
_TOKEN_RE = re.compile(rf"{_WORD}|\S")
_WORD_RE = re.compile(_WORD)
_PUNCT_RE = re.compile(r"(?:[^\w\s]|_)+")


def _check_text(text: object) -> str:
    if not isinstance(text, str):
        raise InputError(f"expected text as str, got {type(text).__name__}")
    return text


def is_punct(token: str) -> bool:
    """True when the token consists only of punctuation or symbols."""
    return bool(_PUNCT_RE.fullmatch(token))


def _is_acronym(word: str) -> bool:
    return len(word) >= 2 and word.isupper()


def _lower_word(word: str) -> str:
    return word if _is_acronym(word) else word.lower()


def to_lower(
    x: str | Sequence[str], keep_acronyms: bool = False
) -> str | list[str]:
    """Lowercase a text or a token sequence.

    With ``keep_acronyms`` words of two or more characters that are entirely
    upper-case are left as they are. Applying it twice changes nothing.
    """
    if isinstance(x, str):
        if not keep_acronyms:
            return x.lower()
        return _WORD_RE.sub(lambda m: _lower_word(m.group()), x)
    if not isinstance(x, Sequence):
        raise InputError(
            f"expected text or token sequence, got {type(x).__name__}"
        )
    if keep_acronyms:
        return [_lower_word(_check_text(t)) for t in x]
    return [_check_text(t).lower() for t in x]


def tokenize(
    text: str,
    remove_punct: bool = False,
    lowercase: bool = False,
    keep_acronyms: bool = False,
) -> list[str]:
    """Split text into word and punctuation tokens.

    Args:
        text: The text to split. An empty string gives an empty list.
        remove_punct: Drop tokens made only of punctuation or symbols.
        lowercase: Lowercase every token (see ``to_lower``).
        keep_acronyms: With ``lowercase``, leave all-caps words unchanged.

    Raises:
        InputError: If ``text`` is not a string.
    """
    policy = TokenPolicy(
        remove_punct=remove_punct,
        lowercase=lowercase,
        keep_acronyms=keep_acronyms,
    )
    return apply_policy(_TOKEN_RE.findall(_check_text(text)), policy)


def apply_policy(tokens: Iterable[str], policy: TokenPolicy) -> list[str]:
    """Apply punctuation removal and lowercasing to existing tokens."""
    out = list(tokens)
    if policy.remove_punct:
        out = [t for t in out if not is_punct(t)]
    if policy.lowercase:
        out = to_lower(out, keep_acronyms=policy.keep_acronyms)
    return out


@lru_cache(maxsize=8)
def _stemmer(language: str) -> Stemmer.Stemmer:
    try:
        return Stemmer.Stemmer(language)
    except KeyError:
        raise InputError(
            f"no stemmer for language {language!r}; "
            f"available: {', '.join(Stemmer.algorithms())}"
        ) from None


def stem_tokens(tokens: Sequence[str], language: str = "english") -> list[str]:
    """Reduce each token to its Snowball stem. Punctuation passes through."""
    stemmer = _stemmer(language)
    return [t if is_punct(t) else stemmer.stemWord(t) for t in tokens]


def remove_tokens(tokens: Sequence[str], words: Iterable[str]) -> list[str]:
    """Drop every token that appears in ``words`` (e.g. ``STOP_WORDS``)."""
    drop = words if isinstance(words, (set, frozenset)) else set(words)
    return [t for t in tokens if t not in drop]


def tokens(
    x: CorpusLike,
    remove_punct: bool = False,
    lowercase: bool = False,
    keep_acronyms: bool = False,
) -> list[Tokens]:
    """Tokenize every document of a corpus-like input with one policy.

    Pre-tokenized ``Tokens`` are passed through the same punctuation and
    case policy, so the result is uniform across documents.
    """
    policy = TokenPolicy(
        remove_punct=remove_punct,
        lowercase=lowercase,
        keep_acronyms=keep_acronyms,
    )
    return tokens_with_policy(x, policy)


def tokens_with_policy(x: CorpusLike, policy: TokenPolicy) -> list[Tokens]:
    if isinstance(x, Tokens):
        x = [x]
    if _is_token_sequence(x):
        docs = [Tokens(t.doc_id, tuple(apply_policy(t.tokens, policy)))
                for t in x]
    else:
        docs = [
            Tokens(t.doc_id, tuple(apply_policy(
                _TOKEN_RE.findall(t.content), policy,
            )))
            for t in as_texts(x)
        ]
    logger.debug(
        "tokenized %d documents (%d tokens)",
        len(docs), sum(len(d) for d in docs),
    )
    return docs


def _is_token_sequence(x: object) -> bool:
    if isinstance(x, (str, dict)) or not isinstance(x, Sequence) or not x:
        return False
    kinds = {isinstance(item, Tokens) for item in x}
    if kinds == {True}:
        return True
    if True in kinds:
        raise InputError("cannot mix Tokens with other document types")
    return False


def ntoken(x: CorpusLike, **policy: bool) -> dict[str, int]:
    """Number of tokens per document, keyed by doc id."""
    return {t.doc_id: len(t) for t in tokens(x, **policy)}


def ntype(x: CorpusLike, **policy: bool) -> dict[str, int]:
    """Number of distinct tokens per document, keyed by doc id."""
    return {t.doc_id: len(set(t.tokens)) for t in tokens(x, **policy)}
