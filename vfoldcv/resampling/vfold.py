"""
V-fold cross-validation.

The data are split at random into ``v`` folds of roughly equal size. Each
split holds one fold out for assessment and uses the other ``v - 1`` folds
for analysis, so a single partitioning yields ``v`` splits.

With ``strata`` the folds are drawn within each stratum of the chosen column
(numeric columns are quantile-binned first, strata below 10% of the rows are
pooled). With ``repeats > 1`` the whole partitioning is drawn again for every
repeat and the splits are returned repeat by repeat.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import numpy as np

from vfoldcv.config import VFoldConfig
from vfoldcv.data.backend import ColumnRef, Dataset
from vfoldcv.data.frame_backend import as_dataset
from vfoldcv.errors import ConfigurationError
from vfoldcv.resampling.folds import (
    RngLike,
    as_generator,
    assign_stratified_folds,
    check_folds_filled,
    check_v,
)
from vfoldcv.resampling.rset import ResampleSet
from vfoldcv.resampling.splits import Split, build_splits
from vfoldcv.resampling.strata import check_breaks, check_pool, make_strata, resolve_strata

logger = logging.getLogger(__name__)


def make_ids(num: int, prefix: str) -> List[str]:
    """Identifiers ``prefix1..prefixNUM`` zero-padded to the width of ``num``.

    >>> make_ids(10, "Fold")[:2]
    ['Fold01', 'Fold02']
    """
    width = len(str(num))
    return [f"{prefix}{i:0{width}d}" for i in range(1, num + 1)]


def check_repeats(repeats: int) -> None:
    """Raise ConfigurationError unless ``repeats`` is a single positive integer."""
    if (
        isinstance(repeats, (bool, np.bool_))
        or not isinstance(repeats, (int, np.integer))
        or repeats < 1
    ):
        raise ConfigurationError(f"`repeats` must be a single positive integer, got {repeats!r}")


def vfold_splits(
    n: int,
    v: int,
    strata: Optional[np.ndarray],
    rng: np.random.Generator,
) -> Tuple[List[Split], List[str]]:
    """Draw one V-fold partitioning.

    Args:
        n: Number of records.
        v: Number of folds.
        strata: Stratum label per record, or None.
        rng: Generator consumed for the fold draws.

    Returns:
        Tuple of (splits in fold order, fold identifiers).
    """
    folds = assign_stratified_folds(strata, v, rng, n=n)
    check_folds_filled(folds, v)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Fold sizes: {np.bincount(folds, minlength=v + 1)[1:].tolist()}")
    return build_splits(folds, v), make_ids(v, "Fold")


def vfold_cv(
    data: Any,
    v: int = 10,
    repeats: int = 1,
    strata: Optional[ColumnRef] = None,
    breaks: int = 4,
    rng: RngLike = None,
    pool: float = 0.1,
) -> ResampleSet:
    """V-fold cross-validation resamples of ``data``.

    Args:
        data: pandas DataFrame or :class:`Dataset`. Read only.
        v: Number of folds.
        repeats: Number of independent partitionings.
        strata: Column used to stratify the folds: a name, a sequence of
            names or a callable selecting from the column names. A selection
            that matches no column gives unstratified folds.
        breaks: Number of quantile bins for a numeric strata column.
        rng: numpy Generator or seed. All repeats draw from this one stream.
        pool: Strata holding less than this share of rows are pooled.

    Returns:
        ResampleSet with ``repeats * v`` splits. The ``id`` column holds
        ``Fold<k>`` for a single repeat; with repeats it holds ``Repeat<r>``
        and ``id2`` holds ``Fold<k>``.

    Raises:
        ConfigurationError: On invalid ``v``, ``repeats``, ``breaks`` or ``pool``, an
            unknown strata column, or a ``v`` too large for the data.
    """
    dataset: Dataset = as_dataset(data)
    check_v(v)
    check_repeats(repeats)
    check_breaks(breaks)
    check_pool(pool)

    strata_col = resolve_strata(dataset, strata)
    n = dataset.n_rows
    strata_labels = None
    if strata_col is not None:
        strata_labels = make_strata(dataset.column(strata_col), breaks=breaks, pool=pool)

    gen = as_generator(rng)
    splits: List[Split] = []
    ids = {"id": []}
    if repeats == 1:
        fold_splits, fold_ids = vfold_splits(n, v, strata_labels, gen)
        splits.extend(fold_splits)
        ids["id"].extend(fold_ids)
    else:
        ids["id2"] = []
        for repeat_id in make_ids(repeats, "Repeat"):
            fold_splits, fold_ids = vfold_splits(n, v, strata_labels, gen)
            splits.extend(fold_splits)
            ids["id"].extend([repeat_id] * len(fold_splits))
            ids["id2"].extend(fold_ids)

    attrib = {"v": int(v), "repeats": int(repeats), "stratified": strata_col is not None}
    logger.info(
        f"Built {len(splits)} splits over {n} rows "
        f"(v={v}, repeats={repeats}, strata={strata_col!r})"
    )
    return ResampleSet(splits=tuple(splits), ids=ids, attrib=attrib, scheme="vfold")


def vfold_cv_from_config(data: Any, cfg: VFoldConfig, rng: RngLike = None) -> ResampleSet:
    """Run :func:`vfold_cv` with the settings of ``cfg``.

    Args:
        data: pandas DataFrame or :class:`Dataset`.
        cfg: Resampling configuration.
        rng: Overrides ``cfg.random_seed`` when given.
    """
    return vfold_cv(
        data,
        v=cfg.v,
        repeats=cfg.repeats,
        strata=cfg.strata,
        breaks=cfg.breaks,
        rng=cfg.random_seed if rng is None else rng,
        pool=cfg.pool,
    )
