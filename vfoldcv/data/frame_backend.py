"""
pandas-backed dataset, optionally loaded from a CSV file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

import pandas as pd

from vfoldcv.data.backend import ArrayLike, Dataset


class DataFrameDataset(Dataset):
    """Dataset view over a pandas DataFrame.

    The frame is held by reference. Row positions (not index labels) are the
    record indices handed out by the resampling functions.
    """

    def __init__(self, df: pd.DataFrame):
        """Wrap a DataFrame.

        Args:
            df: Frame to resample. Not copied.
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected a pandas DataFrame, got {type(df).__name__}")
        self._df = df

    @classmethod
    def from_csv(cls, path: str | Path, **read_kwargs: Any) -> DataFrameDataset:
        """Load a CSV file into a dataset.

        Args:
            path: Path to the CSV file.
            **read_kwargs: Passed through to ``pd.read_csv``.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Required file not found: {path}")
        return cls(pd.read_csv(path, **read_kwargs))

    @property
    def n_rows(self) -> int:
        return len(self._df)

    @property
    def columns(self) -> List[str]:
        return list(self._df.columns)

    def _get_column(self, name: str) -> ArrayLike:
        col = self._df[name]
        # Keep categorical/bool dtypes visible to the binner
        if isinstance(col.dtype, pd.CategoricalDtype):
            return col.array
        return col.to_numpy()


def as_dataset(data: Any) -> Dataset:
    """Coerce ``data`` to a :class:`Dataset`.

    Args:
        data: A Dataset (returned unchanged) or a pandas DataFrame.

    Raises:
        TypeError: For any other container.
    """
    if isinstance(data, Dataset):
        return data
    if isinstance(data, pd.DataFrame):
        return DataFrameDataset(data)
    raise TypeError(
        f"Cannot resample object of type {type(data).__name__}; "
        "pass a pandas DataFrame or a Dataset"
    )
