"""Data structures for ishmael."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._errors import InputError


class ValueType(str, Enum):
    """How a KWIC pattern is interpreted."""

    FIXED = "fixed"
    GLOB = "glob"
    REGEX = "regex"

    @classmethod
    def parse(cls, value: ValueType | str) -> ValueType:
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(repr(v.value) for v in cls)
            raise InputError(
                f"value_type must be one of {choices}, got {value!r}"
            ) from None


@dataclass(slots=True, frozen=True)
class TokenPolicy:
    """Tokenization settings shared by every document of a DFM."""

    remove_punct: bool = False
    lowercase: bool = False
    keep_acronyms: bool = False   # only consulted when lowercase is set

    def __post_init__(self) -> None:
        for name in ("remove_punct", "lowercase", "keep_acronyms"):
            if not isinstance(getattr(self, name), bool):
                raise InputError(
                    f"{name} must be a bool, got {getattr(self, name)!r}"
                )


@dataclass(slots=True, frozen=True)
class Text:
    doc_id: str
    content: str
    delimiter: str | None = None  # delimiter match that opened this segment
    parent: str | None = None     # doc_id this text was segmented from


@dataclass(slots=True, frozen=True)
class Tokens:
    doc_id: str
    tokens: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.tokens)


@dataclass(slots=True, frozen=True)
class KwicMatch:
    doc_id: str
    position: int   # 0-based index of the first matched token
    end: int        # inclusive
    pre: tuple[str, ...]
    keyword: tuple[str, ...]
    post: tuple[str, ...]
    pattern: str


@dataclass(slots=True, frozen=True)
class DispersionPoint:
    doc_id: str
    pattern: str
    position: float  # token index, or index / doc length when relative


@dataclass(slots=True, frozen=True)
class Dispersion:
    scale: str      # "absolute" or "relative"
    x_label: str
    doc_ids: list[str]
    points: list[DispersionPoint] = field(default_factory=list)
