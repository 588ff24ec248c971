"""
Read-only data access for resampling.

This module provides:
- Dataset: Abstract base class for tabular data (row count, schema, columns)
- DataFrameDataset: pandas-backed Dataset, loadable from CSV
- as_dataset: Wrap a DataFrame or pass a Dataset through
"""

from vfoldcv.data.backend import ColumnRef, Dataset
from vfoldcv.data.frame_backend import DataFrameDataset, as_dataset

__all__ = [
    "ColumnRef",
    "Dataset",
    "DataFrameDataset",
    "as_dataset",
]
