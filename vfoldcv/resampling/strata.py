"""
Stratification variable binning.

Turns a raw column into a small set of discrete stratum labels:
- categorical columns (and numeric ones with few distinct values) keep their
  categories
- numeric columns are cut into quantile bins
- categories holding less than ``pool`` of the rows are pooled so that every
  stratum is large enough to be spread over the folds
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from vfoldcv.data.backend import ColumnRef, Dataset
from vfoldcv.errors import ConfigurationError

logger = logging.getLogger(__name__)

MISSING_LABEL = "<NA>"
POOLED_LABEL = "other"
SINGLE_LABEL = "strata1"


def check_breaks(breaks: int) -> None:
    """Raise ConfigurationError unless ``breaks`` is a single positive integer."""
    if isinstance(breaks, (bool, np.bool_)) or not isinstance(breaks, (int, np.integer)):
        raise ConfigurationError(
            f"`breaks` must be a single positive integer, got {breaks!r}"
        )
    if breaks < 1:
        raise ConfigurationError(f"`breaks` must be a single positive integer, got {breaks}")


def check_pool(pool: float) -> None:
    """Raise ConfigurationError unless ``pool`` is a share in [0, 1)."""
    if isinstance(pool, (bool, np.bool_)) or not isinstance(pool, (int, float, np.number)):
        raise ConfigurationError(f"`pool` must be in [0, 1), got {pool!r}")
    if not 0 <= pool < 1:
        raise ConfigurationError(f"`pool` must be in [0, 1), got {pool}")


def resolve_strata(dataset: Dataset, strata: Optional[ColumnRef]) -> Optional[str]:
    """Resolve a strata reference to a single column name.

    Args:
        dataset: Dataset whose schema is searched.
        strata: Column name, sequence of names, callable selector, or None.

    Returns:
        The column name, or None when no stratification applies (``strata``
        omitted, or a selector that matched zero columns).

    Raises:
        ConfigurationError: If a named column is absent or more than one
            column is selected.
    """
    if strata is None:
        return None

    names = dataset.select(strata)
    if not names:
        logger.info("Strata selection matched no columns; using unstratified folds")
        return None
    if len(names) > 1:
        raise ConfigurationError(
            f"`strata` should select a single column, got {names}"
        )
    return names[0]


def _is_categorical(series: pd.Series, nunique: int) -> bool:
    if pd.api.types.is_bool_dtype(series) or not pd.api.types.is_numeric_dtype(series):
        return True
    return series.nunique(dropna=True) <= nunique


def _as_labels(series: pd.Series) -> np.ndarray:
    labels = np.array(series.astype(str), dtype=object)
    labels[series.isna().to_numpy()] = MISSING_LABEL
    return labels


def _free_label(base: str, taken: np.ndarray) -> str:
    taken = set(taken)
    label, i = base, 1
    while label in taken:
        label = f"{base}{i}"
        i += 1
    return label


def pool_rare(labels: np.ndarray, pool: float = 0.1) -> np.ndarray:
    """Pool categories whose share of rows is below ``pool``.

    All rare categories are merged into one ``"other"`` stratum (``"other1"``,
    ``"other2"``, ... when a kept category already has that name). If that
    stratum is still below ``pool`` it is folded into the smallest remaining
    category instead. When every category is rare, a single stratum is
    returned.

    Args:
        labels: Stratum label per record.
        pool: Minimum share of rows a category needs to stand on its own.

    Returns:
        New label array; ``labels`` is not modified.
    """
    labels = np.asarray(labels, dtype=object)
    n = len(labels)
    if n == 0:
        return labels.copy()

    cats, counts = np.unique(labels, return_counts=True)
    rare = counts / n < pool
    if not rare.any():
        return labels.copy()

    if rare.all():
        logger.warning(
            f"Too little data to stratify: all {len(cats)} categories hold less "
            f"than {pool:.0%} of the rows. Using a single stratum."
        )
        return np.full(n, SINGLE_LABEL, dtype=object)

    rare_cats = cats[rare]
    kept_cats = cats[~rare]
    if counts[rare].sum() / n < pool:
        target = kept_cats[np.argmin(counts[~rare])]
    else:
        target = _free_label(POOLED_LABEL, kept_cats)

    logger.warning(
        f"Pooling {len(rare_cats)} categories below {pool:.0%} of the rows "
        f"into '{target}': {list(rare_cats)}"
    )
    pooled = labels.copy()
    pooled[np.isin(labels, rare_cats)] = target
    return pooled


def make_strata(
    values: ArrayLike,
    breaks: int = 4,
    nunique: int = 5,
    pool: float = 0.1,
    depth: int = 20,
) -> np.ndarray:
    """Convert a stratification column into discrete stratum labels.

    Args:
        values: One value per record.
        breaks: Number of quantile bins for numeric values.
        nunique: Numeric columns with at most this many distinct values are
            treated as categorical.
        pool: Categories below this share of rows are pooled.
        depth: Minimum expected records per quantile bin; ``breaks`` is
            lowered when the data cannot support it.

    Returns:
        Object array of string labels, same length as ``values``.

    Raises:
        ConfigurationError: If ``breaks`` is not a positive integer, ``pool``
            is outside [0, 1) or ``values`` is not one-dimensional.
    """
    check_breaks(breaks)
    check_pool(pool)

    if isinstance(values, pd.Series):
        series = values.reset_index(drop=True)
    elif isinstance(values, pd.Categorical):
        series = pd.Series(values)
    else:
        arr = np.asarray(values)
        if arr.ndim != 1:
            raise ConfigurationError(
                f"Stratification values must be 1D, got shape {arr.shape}"
            )
        series = pd.Series(arr)

    n = len(series)
    if _is_categorical(series, nunique):
        return pool_rare(_as_labels(series), pool)

    if n / breaks < depth:
        reduced = min(breaks, int(np.floor(n / depth)))
        logger.warning(
            f"The number of observations in each quantile is below the "
            f"recommended threshold of {depth}. Stratification will use "
            f"{reduced} breaks instead of {breaks}."
        )
        breaks = reduced

    if breaks < 2:
        logger.warning("The bins specified by `breaks` must be >= 2. Using a single stratum.")
        return np.full(n, SINGLE_LABEL, dtype=object)

    binned = pd.qcut(series.astype(float), q=breaks, duplicates="drop")
    return pool_rare(_as_labels(binned), pool)
