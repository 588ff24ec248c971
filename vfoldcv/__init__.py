"""V-fold cross-validation resampling for in-memory tabular data."""

from vfoldcv.config import VFoldConfig
from vfoldcv.data import DataFrameDataset, Dataset
from vfoldcv.errors import ConfigurationError
from vfoldcv.resampling import ResampleSet, Split, vfold_cv, vfold_cv_from_config

__all__ = [
    "ConfigurationError",
    "DataFrameDataset",
    "Dataset",
    "ResampleSet",
    "Split",
    "VFoldConfig",
    "vfold_cv",
    "vfold_cv_from_config",
]

__version__ = "0.1.0"
