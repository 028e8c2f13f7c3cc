"""Tests for tokenizer: word/punctuation splitting, case and filters."""

import string

import pytest

from ishmael import (
    STOP_WORDS,
    InputError,
    Tokens,
    is_punct,
    ntoken,
    ntype,
    remove_tokens,
    stem_tokens,
    to_lower,
    tokenize,
    tokens,
)


def test_possessive_kept_whole():
    """Possessive apostrophe stays inside the word."""
    assert tokenize("the whale's tail", remove_punct=True, lowercase=True) == [
        "the", "whale's", "tail",
    ]


def test_contraction_kept_whole():
    """Contractions are single tokens."""
    assert tokenize("I don't know") == ["I", "don't", "know"]


def test_curly_apostrophe():
    """Typographic apostrophes are handled like straight ones."""
    assert tokenize("the whale’s tail") == ["the", "whale’s", "tail"]


def test_punctuation_emitted_in_order():
    """Each punctuation mark is its own token."""
    assert tokenize("Call me Ishmael.") == ["Call", "me", "Ishmael", "."]
    assert tokenize("Ahab!!") == ["Ahab", "!", "!"]


def test_hyphen_splits_words():
    """Hyphenated words split around the hyphen."""
    assert tokenize("carpet-bag") == ["carpet", "-", "bag"]


def test_remove_punct_leaves_no_punctuation(moby_text):
    """No punctuation-only token survives remove_punct."""
    toks = tokenize(moby_text, remove_punct=True)
    assert toks
    assert not any(is_punct(t) for t in toks)
    assert not any(t in string.punctuation for t in toks)


def test_remove_punct_drops_underscores():
    """Underscores are punctuation, alone or in runs."""
    assert tokenize("whale ___ sea _", remove_punct=True) == ["whale", "sea"]
    assert tokenize("snake_case") == ["snake", "_", "case"]
    assert is_punct("_") and is_punct("___")


def test_remove_punct_keeps_words():
    assert tokenize("Ahab, the whale!", remove_punct=True) == ["Ahab", "the", "whale"]


def test_empty():
    assert tokenize("") == []
    assert tokenize("   \n") == []


@pytest.mark.parametrize("bad", [None, 42, b"whale", ["whale"]])
def test_non_text_rejected(bad):
    """Anything but a str is an InputError."""
    with pytest.raises(InputError):
        tokenize(bad)


def test_input_error_is_value_error():
    with pytest.raises(ValueError):
        tokenize(None)


def test_lowercase_tokens():
    assert tokenize("The WHALE", lowercase=True) == ["the", "whale"]


def test_keep_acronyms():
    """All-caps words of two or more letters keep their case."""
    toks = tokenize("I saw the NASA whale", lowercase=True, keep_acronyms=True)
    assert toks == ["i", "saw", "the", "NASA", "whale"]


def test_to_lower_text_keep_acronyms():
    assert to_lower("USA and Ahab", keep_acronyms=True) == "USA and ahab"
    assert to_lower("USA and Ahab") == "usa and ahab"


@pytest.mark.parametrize("keep", [False, True])
def test_to_lower_idempotent(moby_text, keep):
    """Lowercasing twice equals lowercasing once."""
    once = to_lower(moby_text, keep_acronyms=keep)
    assert to_lower(once, keep_acronyms=keep) == once
    toks = tokenize(moby_text)
    once_toks = to_lower(toks, keep_acronyms=keep)
    assert to_lower(once_toks, keep_acronyms=keep) == once_toks


def test_to_lower_rejects_non_text():
    with pytest.raises(InputError):
        to_lower(None)


def test_stem_tokens():
    """Snowball stems; punctuation is untouched."""
    assert stem_tokens(["whales", "hunting", "."]) == ["whale", "hunt", "."]


def test_stem_unknown_language():
    with pytest.raises(InputError):
        stem_tokens(["whale"], language="klingon")


def test_remove_stop_words():
    """Stop words are filtered from lowercased tokens."""
    toks = tokenize("the whale and the sea", lowercase=True)
    assert remove_tokens(toks, STOP_WORDS) == ["whale", "sea"]


def test_stop_words_include_contractions():
    """Stop words are whole contractions, not fragments."""
    assert "don't" in STOP_WORDS
    assert "don" not in STOP_WORDS


def test_ntoken_and_ntype():
    """Token and type counts per document."""
    docs = {"a": "the whale the sea", "b": "Call me Ishmael."}
    assert ntoken(docs) == {"a": 4, "b": 4}
    assert ntoken(docs, remove_punct=True) == {"a": 4, "b": 3}
    assert ntype(docs) == {"a": 3, "b": 4}


def test_tokens_assigns_doc_ids():
    docs = tokens(["Call me Ishmael.", "Ahab"], remove_punct=True)
    assert [d.doc_id for d in docs] == ["text1", "text2"]
    assert docs[0].tokens == ("Call", "me", "Ishmael")


def test_tokens_applies_policy_to_pretokenized():
    """Tokens input is filtered and lowercased too."""
    docs = tokens([Tokens("d", ("The", ","))], remove_punct=True, lowercase=True)
    assert docs == [Tokens("d", ("the",))]


def test_tokens_rejects_mixed_input():
    with pytest.raises(InputError):
        tokens([Tokens("d", ("a",)), "b"])
