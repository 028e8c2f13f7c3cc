"""Weighting schemes for document-feature matrices."""

from __future__ import annotations

import logging
import math

from ._dfm import Dfm, _is_number
from ._errors import InputError

logger = logging.getLogger(__name__)

SCHEMES = ("count", "relFreq", "relMaxFreq", "logFreq", "boolean")


def _check_factor(name: str, value: object) -> float:
    if not _is_number(value) or not math.isfinite(value):
        raise InputError(f"{name} must be a finite number, got {value!r}")
    return value


def weight(dfm: Dfm, scheme: str = "relFreq", multiplier: float = 1.0) -> Dfm:
    """Return a new Dfm with every row re-weighted.

    Schemes:
        count: values unchanged.
        relFreq: value / row total. A row whose total is zero stays zero.
        relMaxFreq: value / largest value in the row.
        logFreq: 1 + log10(value) for positive values.
        boolean: 1 for every positive value.

    Every result is then multiplied by ``multiplier`` (100 gives percent).
    ``dfm`` itself is not modified.
    """
    if not isinstance(dfm, Dfm):
        raise InputError(f"expected Dfm, got {type(dfm).__name__}")
    if scheme not in SCHEMES:
        raise InputError(
            f"unknown weighting scheme {scheme!r}; expected one of {SCHEMES}"
        )
    multiplier = _check_factor("multiplier", multiplier)

    rows: list[dict[str, float]] = []
    for row in dfm._rows:
        if scheme == "relFreq":
            total = sum(row.values())
            new = {f: v / total * multiplier for f, v in row.items()} if total else {}
        elif scheme == "relMaxFreq":
            peak = max(row.values(), default=0)
            new = {f: v / peak * multiplier for f, v in row.items()} if peak else {}
        elif scheme == "logFreq":
            new = {f: (1 + math.log10(v)) * multiplier
                   for f, v in row.items() if v > 0}
        elif scheme == "boolean":
            new = {f: 1 * multiplier for f, v in row.items() if v > 0}
        else:
            new = {f: v * multiplier for f, v in row.items()}
        rows.append(new)

    logger.debug(
        "weighted dfm %s -> %s (x%s)", dfm.weighting, scheme, multiplier,
    )
    return dfm._derive(rows, scheme)


def scale(dfm: Dfm, factor: float) -> Dfm:
    """Multiply every cell by ``factor``; the weighting label is kept."""
    if not isinstance(dfm, Dfm):
        raise InputError(f"expected Dfm, got {type(dfm).__name__}")
    factor = _check_factor("factor", factor)
    rows = [{f: v * factor for f, v in row.items()} for row in dfm._rows]
    return dfm._derive(rows, dfm.weighting)
