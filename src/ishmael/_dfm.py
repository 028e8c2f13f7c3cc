"""Document-feature matrix: sparse per-document term counts."""

from __future__ import annotations

import logging
import math
import operator
from numbers import Real
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Sequence

from ._errors import InputError
from ._tokenizer import remove_tokens, stem_tokens, tokens_with_policy
from ._types import TokenPolicy

if TYPE_CHECKING:
    from ._corpus import CorpusLike

logger = logging.getLogger(__name__)


def _div(a: float, b: float) -> float:
    """Division where x/0 is inf (or -inf) and 0/0 is nan."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a)
    return a / b


def _is_number(x: object) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


class Column:
    """One feature's values across the documents of a DFM.

    Supports ``+ - * /`` with a scalar or with another column over the same
    documents, returning a new Column.
    """

    __slots__ = ("_name", "_doc_ids", "_values")

    def __init__(
        self, name: str, doc_ids: Sequence[str], values: Iterable[float]
    ) -> None:
        self._name = name
        self._doc_ids = tuple(doc_ids)
        self._values = tuple(values)
        if len(self._values) != len(self._doc_ids):
            raise InputError("column needs one value per document")

    @property
    def name(self) -> str:
        return self._name

    @property
    def doc_ids(self) -> tuple[str, ...]:
        return self._doc_ids

    @property
    def values(self) -> tuple[float, ...]:
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __getitem__(self, key: int | str) -> float:
        if isinstance(key, str):
            try:
                return self._values[self._doc_ids.index(key)]
            except ValueError:
                raise KeyError(f"no document {key!r}") from None
        return self._values[key]

    def __repr__(self) -> str:
        return f"Column({self._name!r}, {list(self._values)!r})"

    def to_list(self) -> list[float]:
        return list(self._values)

    def to_dict(self) -> dict[str, float]:
        return dict(zip(self._doc_ids, self._values))

    def _apply(
        self,
        other: object,
        op: Callable[[float, float], float],
        symbol: str,
        reflected: bool = False,
    ) -> Column:
        if isinstance(other, Column):
            if other._doc_ids != self._doc_ids:
                raise InputError("columns cover different documents")
            rhs = other._values
            name = f"{self._name}{symbol}{other._name}"
        elif _is_number(other):
            rhs = (other,) * len(self._values)
            name = f"{self._name}{symbol}{other}"
        else:
            return NotImplemented
        if reflected:
            values = [op(b, a) for a, b in zip(self._values, rhs)]
            name = f"{other}{symbol}{self._name}"
        else:
            values = [op(a, b) for a, b in zip(self._values, rhs)]
        return Column(name, self._doc_ids, values)

    def __add__(self, other: object) -> Column:
        return self._apply(other, operator.add, "+")

    def __radd__(self, other: object) -> Column:
        return self._apply(other, operator.add, "+", reflected=True)

    def __sub__(self, other: object) -> Column:
        return self._apply(other, operator.sub, "-")

    def __rsub__(self, other: object) -> Column:
        return self._apply(other, operator.sub, "-", reflected=True)

    def __mul__(self, other: object) -> Column:
        return self._apply(other, operator.mul, "*")

    def __rmul__(self, other: object) -> Column:
        return self._apply(other, operator.mul, "*", reflected=True)

    def __truediv__(self, other: object) -> Column:
        return self._apply(other, _div, "/")

    def __rtruediv__(self, other: object) -> Column:
        return self._apply(other, _div, "/", reflected=True)


class Dfm:
    """Sparse document-feature matrix.

    Rows are documents in input order, columns are features in the order
    they were first seen. Cells that are not stored are zero. A Dfm is never
    modified after construction; weighting and scaling return new matrices.
    """

    __slots__ = (
        "_doc_ids", "_features", "_feature_index", "_rows",
        "_policy", "_weighting",
    )

    def __init__(
        self,
        doc_ids: Sequence[str],
        features: Sequence[str],
        rows: Sequence[dict[str, float]],
        policy: TokenPolicy | None = None,
        weighting: str = "count",
    ) -> None:
        if len(rows) != len(doc_ids):
            raise InputError("dfm needs one row per document")
        if len(set(doc_ids)) != len(doc_ids):
            raise InputError("dfm doc ids must be unique")
        self._doc_ids = tuple(doc_ids)
        self._features = tuple(features)
        self._feature_index = {f: i for i, f in enumerate(self._features)}
        if len(self._feature_index) != len(self._features):
            raise InputError("dfm features must be unique")
        self._rows: tuple[dict[str, float], ...] = tuple(
            {f: v for f, v in row.items() if v != 0} for row in rows
        )
        for row in self._rows:
            for f in row:
                if f not in self._feature_index:
                    raise InputError(f"row refers to unknown feature {f!r}")
        self._policy = policy
        self._weighting = weighting

    # -- Shape and metadata --

    @property
    def doc_ids(self) -> list[str]:
        return list(self._doc_ids)

    @property
    def features(self) -> list[str]:
        return list(self._features)

    @property
    def shape(self) -> tuple[int, int]:
        return len(self._doc_ids), len(self._features)

    @property
    def ndoc(self) -> int:
        return len(self._doc_ids)

    @property
    def nfeat(self) -> int:
        return len(self._features)

    @property
    def policy(self) -> TokenPolicy | None:
        """Tokenization policy the matrix was built with."""
        return self._policy

    @property
    def weighting(self) -> str:
        return self._weighting

    def __repr__(self) -> str:
        ndoc, nfeat = self.shape
        return f"Dfm({ndoc} documents x {nfeat} features, {self._weighting})"

    # -- Lookup --

    def _doc_index(self, doc: int | str) -> int:
        if isinstance(doc, str):
            try:
                return self._doc_ids.index(doc)
            except ValueError:
                raise KeyError(f"no document {doc!r} in dfm") from None
        if isinstance(doc, bool) or not isinstance(doc, int):
            raise InputError(f"document key must be int or str, got {doc!r}")
        if not -len(self._doc_ids) <= doc < len(self._doc_ids):
            raise IndexError(f"document index {doc} out of range")
        return doc % len(self._doc_ids)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            doc, feature = key
            return self.cell(doc, feature)
        if isinstance(key, str):
            return self.column(key)
        return self.row(key)

    def __contains__(self, feature: object) -> bool:
        return feature in self._feature_index

    def column(self, feature: str) -> Column:
        """Values of ``feature`` per document; an unseen feature is all zeros."""
        return Column(
            feature, self._doc_ids, (row.get(feature, 0) for row in self._rows),
        )

    def row(self, doc: int | str) -> dict[str, float]:
        """Every feature's value in one document, zeros included."""
        stored = self._rows[self._doc_index(doc)]
        return {f: stored.get(f, 0) for f in self._features}

    def nonzero(self, doc: int | str) -> dict[str, float]:
        """Only the non-zero cells of one document, in column order."""
        stored = self._rows[self._doc_index(doc)]
        return {f: stored[f] for f in self._features if f in stored}

    def cell(self, doc: int | str, feature: str) -> float:
        return self._rows[self._doc_index(doc)].get(feature, 0)

    # -- Aggregates and export --

    def row_sums(self) -> dict[str, float]:
        return {d: sum(row.values()) for d, row in zip(self._doc_ids, self._rows)}

    def column_sums(self) -> dict[str, float]:
        sums: dict[str, float] = dict.fromkeys(self._features, 0)
        for row in self._rows:
            for f, v in row.items():
                sums[f] += v
        return sums

    def to_dense(self) -> list[list[float]]:
        return [[row.get(f, 0) for f in self._features] for row in self._rows]

    def _derive(self, rows: list[dict[str, float]], weighting: str) -> Dfm:
        return Dfm(self._doc_ids, self._features, rows, self._policy, weighting)

    def __mul__(self, factor: object) -> Dfm:
        if not _is_number(factor):
            return NotImplemented
        from ._weight import scale
        return scale(self, factor)

    __rmul__ = __mul__


def build_dfm(
    x: CorpusLike,
    remove_punct: bool = False,
    lowercase: bool = True,
    keep_acronyms: bool = False,
    stem: bool = False,
    remove: Iterable[str] | None = None,
    language: str = "english",
) -> Dfm:
    """Count the features of every document under one tokenization policy.

    Args:
        x: A text, Text, Corpus, list of texts, mapping of doc id to text,
            or a list of pre-tokenized ``Tokens``.
        remove_punct: Drop punctuation tokens before counting.
        lowercase: Lowercase tokens before counting.
        keep_acronyms: With ``lowercase``, leave all-caps words unchanged.
        stem: Reduce tokens to their Snowball stems (after ``remove``).
        remove: Words to drop before counting, e.g. ``STOP_WORDS``.
        language: Stemmer language.

    Returns:
        A count Dfm whose row sums equal each document's token count under
        the same policy.
    """
    policy = TokenPolicy(
        remove_punct=remove_punct,
        lowercase=lowercase,
        keep_acronyms=keep_acronyms,
    )
    drop = frozenset(remove) if remove is not None else None

    doc_ids: list[str] = []
    features: dict[str, None] = {}
    rows: list[dict[str, float]] = []
    for doc in tokens_with_policy(x, policy):
        toks: Sequence[str] = doc.tokens
        if drop:
            toks = remove_tokens(toks, drop)
        if stem:
            toks = stem_tokens(toks, language)
        counts: dict[str, float] = {}
        for tok in toks:
            counts[tok] = counts.get(tok, 0) + 1
            features.setdefault(tok)
        doc_ids.append(doc.doc_id)
        rows.append(counts)

    dfm = Dfm(doc_ids, list(features), rows, policy)
    logger.debug("built dfm: %d documents x %d features", *dfm.shape)
    return dfm


def top_features(
    dfm: Dfm, n: int = 10, decreasing: bool = True
) -> list[tuple[str, float]]:
    """The ``n`` features with the largest (or smallest) column totals.

    Ties keep column order.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InputError(f"n must be a non-negative int, got {n!r}")
    totals = list(dfm.column_sums().items())
    totals.sort(key=lambda kv: -kv[1] if decreasing else kv[1])
    return totals[:n]
