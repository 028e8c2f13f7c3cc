"""Ishmael: corpus tokenization, keyword-in-context search and document-feature matrices."""

from __future__ import annotations

import logging

from ._codec import FORMAT_VERSION, dumps_dfm, loads_dfm
from ._corpus import Corpus
from ._dfm import Column, Dfm, build_dfm, top_features
from ._errors import (
    InputError,
    IshmaelChecksumError,
    IshmaelError,
    IshmaelVersionError,
    PatternError,
)
from ._kwic import DEFAULT_WINDOW, KwicResult, dispersion, kwic
from ._phrase import PhraseMatcher, compound
from ._segment import segment
from ._stop_words import STOP_WORDS
from ._tokenizer import (
    is_punct,
    ntoken,
    ntype,
    remove_tokens,
    stem_tokens,
    to_lower,
    tokenize,
    tokens,
)
from ._types import (
    Dispersion,
    DispersionPoint,
    KwicMatch,
    Text,
    TokenPolicy,
    Tokens,
    ValueType,
)
from ._weight import SCHEMES, scale, weight

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Column",
    "Corpus",
    "DEFAULT_WINDOW",
    "Dfm",
    "Dispersion",
    "DispersionPoint",
    "FORMAT_VERSION",
    "InputError",
    "IshmaelChecksumError",
    "IshmaelError",
    "IshmaelVersionError",
    "KwicMatch",
    "KwicResult",
    "PatternError",
    "PhraseMatcher",
    "SCHEMES",
    "STOP_WORDS",
    "Text",
    "TokenPolicy",
    "Tokens",
    "ValueType",
    "build_dfm",
    "compound",
    "dispersion",
    "dumps_dfm",
    "is_punct",
    "kwic",
    "loads_dfm",
    "ntoken",
    "ntype",
    "remove_tokens",
    "scale",
    "segment",
    "stem_tokens",
    "to_lower",
    "tokenize",
    "tokens",
    "top_features",
    "weight",
]

# Applications decide where library log records go.
logging.getLogger(__name__).addHandler(logging.NullHandler())
