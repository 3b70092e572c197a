"""
Percentile ranking
------------------
Rank a value inside a reference population as an integer 0-100.

Rule
----
- Population entries that are null or non-numeric are dropped first.
- index = position of the first sorted value >= the subject;
  percentile = round(index / n * 100), halves rounded up.
- Minimum edge: a subject at (or below) the population minimum reads
  round(100 / n) instead of 0 when n > 1.
- Maximum edge: a subject at (or above) the population maximum reads 100.
- Empty population or non-numeric subject -> 0.

No inversion happens here; callers flip lower-is-better stats themselves
(see grades.grade).
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable

import numpy as np
import pandas as pd

from statboard.engine.metrics import stat_value, to_number


def round_half_up(x: float, ndigits: int = 0):
    """Round halves toward +inf; int for ndigits=0, float otherwise."""
    if ndigits <= 0:
        return int(math.floor(x + 0.5))
    scale = 10 ** ndigits
    return math.floor(x * scale + 0.5) / scale


def clean_population(values: Iterable[Any]) -> pd.Series:
    """Numeric, non-null population values as a float Series (input order kept)."""
    return pd.Series([to_number(v) for v in values], dtype="float64").dropna()


def population_values(entities: Iterable[Any], key) -> pd.Series:
    """Cleaned values of one stat across entities."""
    return clean_population(stat_value(e, key) for e in entities)


def percentile(value: Any, population: Iterable[Any]) -> int:
    v = to_number(value)
    ranked = np.sort(clean_population(population).to_numpy())
    n = len(ranked)
    if v is None or n == 0:
        return 0
    if v >= ranked[-1]:
        return 100

    index = int(np.searchsorted(ranked, v, side="left"))
    if index == 0 and n > 1:
        index = 1
    return round_half_up(index / n * 100)


def league_average(entities: Iterable[Any], key) -> float:
    values = population_values(entities, key)
    return float(values.mean()) if len(values) else 0.0


def league_averages(entities: Iterable[Any], keys: Iterable) -> Dict[str, float]:
    """Mean of each stat over the numeric values present (0.0 when none)."""
    entities = list(entities)
    out = {}
    for key in keys:
        name = key.value if hasattr(key, "value") else str(key)
        out[name] = league_average(entities, key)
    return out
