"""
Split contract and construction from fold labels.

Only the assessment indices are stored. The analysis indices are the
complement over ``0..n-1`` and are computed on first access.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import List

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class Split:
    """A single analysis/assessment partition of a dataset.

    Attributes:
        n: Number of records in the resampled dataset.
        assessment: Sorted 0-based row positions held out in this split.
    """

    n: int
    assessment: np.ndarray

    def __post_init__(self) -> None:
        idx = np.sort(np.asarray(self.assessment, dtype=np.int64))
        if idx.ndim != 1:
            raise ValueError(f"assessment must be 1D, got shape {idx.shape}")
        if len(idx) and (idx[0] < 0 or idx[-1] >= self.n):
            raise ValueError(f"assessment indices must lie in [0, {self.n})")
        idx.setflags(write=False)
        object.__setattr__(self, "assessment", idx)

    @cached_property
    def analysis(self) -> np.ndarray:
        """Row positions used for fitting: every row not in the assessment set."""
        idx = np.setdiff1d(np.arange(self.n, dtype=np.int64), self.assessment, assume_unique=True)
        idx.setflags(write=False)
        return idx

    @property
    def n_assessment(self) -> int:
        return len(self.assessment)

    @property
    def n_analysis(self) -> int:
        return self.n - len(self.assessment)

    def analysis_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """Rows of ``df`` in the analysis set."""
        return df.iloc[self.analysis]

    def assessment_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """Rows of ``df`` in the assessment set."""
        return df.iloc[self.assessment]

    def __repr__(self) -> str:
        return f"<Analysis/Assess/Total> <{self.n_analysis}/{self.n_assessment}/{self.n}>"


def build_splits(fold_labels: np.ndarray, v: int) -> List[Split]:
    """Build one Split per fold label.

    Args:
        fold_labels: Fold label (``1..v``) per record.
        v: Number of folds.

    Returns:
        Splits ordered by ascending fold label.
    """
    fold_labels = np.asarray(fold_labels)
    n = len(fold_labels)
    return [Split(n=n, assessment=np.flatnonzero(fold_labels == k)) for k in range(1, v + 1)]
