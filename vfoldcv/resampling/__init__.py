"""
V-fold cross-validation resampling.

This module provides:
- make_strata: Bin a stratification column into pooled strata
- assign_folds / assign_stratified_folds: Balanced random fold labels
- Split / build_splits: Assessment sets with lazily derived analysis sets
- vfold_cv: Repeated, optionally stratified V-fold partitioning
- ResampleSet: Ordered splits with id columns and metadata
"""

from vfoldcv.resampling.folds import assign_folds, assign_stratified_folds
from vfoldcv.resampling.rset import SUMMARY_RENDERERS, ResampleSet
from vfoldcv.resampling.splits import Split, build_splits
from vfoldcv.resampling.strata import make_strata, pool_rare, resolve_strata
from vfoldcv.resampling.vfold import make_ids, vfold_cv, vfold_cv_from_config

__all__ = [
    "ResampleSet",
    "SUMMARY_RENDERERS",
    "Split",
    "assign_folds",
    "assign_stratified_folds",
    "build_splits",
    "make_ids",
    "make_strata",
    "pool_rare",
    "resolve_strata",
    "vfold_cv",
    "vfold_cv_from_config",
]
