"""
Balanced random fold assignment.

Labels ``1..v`` are recycled to the group length (the last cycle is
truncated) and shuffled with a single permutation, so fold sizes inside a
group differ by at most one. Stratified assignment runs this once per stratum
in order of first appearance, drawing from one generator, so a fixed seed
reproduces the assignment exactly.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from vfoldcv.errors import ConfigurationError

logger = logging.getLogger(__name__)

RngLike = Union[None, int, np.random.Generator]


def as_generator(rng: RngLike = None) -> np.random.Generator:
    """Return ``rng`` if it is a Generator, otherwise seed a new one from it."""
    return rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)


def check_v(v: int) -> None:
    """Raise ConfigurationError unless ``v`` is a single integer >= 2."""
    if isinstance(v, (bool, np.bool_)) or not isinstance(v, (int, np.integer)) or v < 2:
        raise ConfigurationError(f"`v` must be a single integer >= 2, got {v!r}")


def assign_folds(n: int, v: int, rng: RngLike = None) -> np.ndarray:
    """Assign ``n`` records to folds ``1..v``.

    Args:
        n: Number of records in the group.
        v: Number of folds.
        rng: Generator or seed. One permutation is drawn from it.

    Returns:
        Integer array of length ``n`` with values in ``1..v``.
    """
    check_v(v)
    gen = as_generator(rng)
    labels = np.resize(np.arange(1, v + 1), n)
    return gen.permutation(labels)


def assign_stratified_folds(
    strata: Optional[ArrayLike],
    v: int,
    rng: RngLike = None,
    n: Optional[int] = None,
) -> np.ndarray:
    """Assign folds within each stratum and merge the labels.

    Args:
        strata: Stratum label per record, or None for a single implicit
            stratum (``n`` is then required).
        v: Number of folds.
        rng: Generator or seed shared by all strata.
        n: Number of records when ``strata`` is None.

    Returns:
        Integer array of fold labels, aligned with the records.
    """
    check_v(v)
    gen = as_generator(rng)

    if strata is None:
        if n is None:
            raise ValueError("`n` is required when no strata are given")
        return assign_folds(n, v, gen)

    # Group codes follow first appearance, which fixes the draw order
    codes, uniques = pd.factorize(np.asarray(strata, dtype=object), sort=False)
    folds = np.zeros(len(codes), dtype=int)
    for code, label in enumerate(uniques):
        members = np.flatnonzero(codes == code)
        if len(members) < v:
            logger.debug(
                f"Stratum '{label}' has {len(members)} records for {v} folds; "
                "some folds get no records from it"
            )
        folds[members] = assign_folds(len(members), v, gen)
    return folds


def check_folds_filled(folds: np.ndarray, v: int) -> None:
    """Raise ConfigurationError if any fold ``1..v`` received no records."""
    sizes = np.bincount(folds, minlength=v + 1)[1:]
    empty = [int(k) for k in np.flatnonzero(sizes == 0) + 1]
    if empty:
        raise ConfigurationError(
            f"`v` = {v} leaves fold(s) {empty} without records "
            f"({len(folds)} rows available)"
        )
