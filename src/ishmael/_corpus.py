"""Corpus container and normalization of corpus-like inputs."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping, Sequence, Union

from ._errors import InputError
from ._segment import segment
from ._types import Text

if TYPE_CHECKING:
    from ._types import Tokens


class Corpus:
    """An ordered collection of Texts with unique doc ids.

    Accepts a mapping of doc id to text, or an iterable of strings and
    Texts. Plain strings are named ``text1``, ``text2``, ... by position.
    """

    __slots__ = ("_texts", "_index")

    def __init__(
        self, texts: Mapping[str, str] | Iterable[str | Text] = ()
    ) -> None:
        self._texts: tuple[Text, ...] = tuple(_to_texts(texts))
        self._index: dict[str, int] = {}
        for i, t in enumerate(self._texts):
            if t.doc_id in self._index:
                raise InputError(f"duplicate doc id {t.doc_id!r}")
            self._index[t.doc_id] = i

    def __len__(self) -> int:
        return len(self._texts)

    def __iter__(self) -> Iterator[Text]:
        return iter(self._texts)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._index

    def __getitem__(self, key: int | str) -> Text:
        if isinstance(key, str):
            try:
                return self._texts[self._index[key]]
            except KeyError:
                raise KeyError(f"no document {key!r} in corpus") from None
        return self._texts[key]

    def __repr__(self) -> str:
        return f"Corpus({len(self)} documents)"

    @property
    def doc_ids(self) -> list[str]:
        return [t.doc_id for t in self._texts]

    def contents(self) -> list[str]:
        return [t.content for t in self._texts]

    def segment(
        self, pattern: str | re.Pattern[str], keep_delimiter: bool = False
    ) -> Corpus:
        """Segment every document and return the segments as a new Corpus."""
        out: list[Text] = []
        for t in self._texts:
            out.extend(segment(t, pattern, keep_delimiter=keep_delimiter))
        return Corpus(out)


def _to_texts(x: object) -> list[Text]:
    if isinstance(x, Mapping):
        out = []
        for doc_id, content in x.items():
            if not isinstance(doc_id, str) or not isinstance(content, str):
                raise InputError("corpus mapping must map str doc ids to str")
            out.append(Text(doc_id, content))
        return out
    if isinstance(x, (str, bytes)) or not isinstance(x, Iterable):
        raise InputError(
            f"expected a mapping or iterable of texts, got {type(x).__name__}"
        )
    out = []
    for i, item in enumerate(x, start=1):
        if isinstance(item, Text):
            out.append(item)
        elif isinstance(item, str):
            out.append(Text(f"text{i}", item))
        else:
            raise InputError(
                f"expected document as str or Text, got {type(item).__name__}"
            )
    return out


def as_texts(x: object) -> list[Text]:
    """Normalize any corpus-like input to a list of Texts."""
    if isinstance(x, Corpus):
        return list(x)
    if isinstance(x, Text):
        return [x]
    if isinstance(x, str):
        return [Text("text1", x)]
    if x is None:
        raise InputError("expected text or corpus, got None")
    return list(Corpus(x))


CorpusLike = Union[
    str, Text, Corpus, Mapping[str, str], Sequence[Union[str, Text]],
    "Tokens", Sequence["Tokens"],
]
