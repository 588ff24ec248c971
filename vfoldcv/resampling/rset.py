"""
Resample set container and its summary renderers.

A ResampleSet is a single tagged structure: ``scheme`` names the resampling
scheme and selects the summary renderer from ``SUMMARY_RENDERERS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Tuple

import numpy as np
import pandas as pd

from vfoldcv.resampling.splits import Split


def _pretty_vfold(attrib: Mapping[str, Any]) -> str:
    res = f"{attrib['v']}-fold cross-validation"
    if attrib["repeats"] > 1:
        res += f" repeated {attrib['repeats']} times"
    if attrib["stratified"]:
        res += " using stratification"
    return res


SUMMARY_RENDERERS: Dict[str, Callable[[Mapping[str, Any]], str]] = {
    "vfold": _pretty_vfold,
}


@dataclass(frozen=True, eq=False)
class ResampleSet:
    """Ordered collection of splits with identifier columns and metadata.

    Attributes:
        splits: Splits in output order.
        ids: Identifier columns (``id``, and ``id2`` for repeated schemes),
            each holding one value per split.
        attrib: Scheme metadata, e.g. ``{"v": 10, "repeats": 1, "stratified": False}``.
        scheme: Scheme tag used to pick the summary renderer.
    """

    splits: Tuple[Split, ...]
    ids: Mapping[str, Tuple[str, ...]]
    attrib: Mapping[str, Any] = field(default_factory=dict)
    scheme: str = "vfold"

    def __post_init__(self) -> None:
        splits = tuple(self.splits)
        ids = {name: tuple(values) for name, values in self.ids.items()}
        for name, values in ids.items():
            if len(values) != len(splits):
                raise ValueError(
                    f"Id column '{name}' has {len(values)} values for {len(splits)} splits"
                )
        object.__setattr__(self, "splits", splits)
        object.__setattr__(self, "ids", MappingProxyType(ids))
        object.__setattr__(self, "attrib", MappingProxyType(dict(self.attrib)))

    def __len__(self) -> int:
        return len(self.splits)

    def __iter__(self) -> Iterator[Split]:
        return iter(self.splits)

    def __getitem__(self, i: int) -> Split:
        return self.splits[i]

    @property
    def id_columns(self) -> List[str]:
        """Identifier column names in order."""
        return list(self.ids)

    def to_frame(self) -> pd.DataFrame:
        """One row per split: the Split object, its identifiers and set sizes."""
        data: Dict[str, Any] = {"splits": list(self.splits)}
        data.update({name: list(values) for name, values in self.ids.items()})
        data["n_analysis"] = [split.n_analysis for split in self.splits]
        data["n_assessment"] = [split.n_assessment for split in self.splits]
        return pd.DataFrame(data)

    def fold_table(self) -> pd.DataFrame:
        """Long table with one row per (split, assessment record).

        Columns are the identifier columns plus ``row``, the 0-based row
        position held out in that split.
        """
        sizes = [split.n_assessment for split in self.splits]
        data: Dict[str, Any] = {
            name: np.repeat(np.asarray(values, dtype=object), sizes)
            for name, values in self.ids.items()
        }
        if self.splits:
            data["row"] = np.concatenate([split.assessment for split in self.splits])
        else:
            data["row"] = np.array([], dtype=np.int64)
        return pd.DataFrame(data)

    def pretty(self) -> str:
        """One-line description of the resampling scheme."""
        if self.scheme not in SUMMARY_RENDERERS:
            raise KeyError(f"No summary renderer for scheme '{self.scheme}'")
        return SUMMARY_RENDERERS[self.scheme](self.attrib)

    def __str__(self) -> str:
        return f"#  {self.pretty()}\n{self.to_frame().to_string()}"
