"""
Abstract dataset interface used by the resampling core.

The resampling functions only need three things from a tabular container:
how many rows it has, which columns exist, and the values of one column.
Anything that fulfils this contract can be resampled; the container is
never mutated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Sequence, Union

from numpy.typing import ArrayLike

from vfoldcv.errors import ConfigurationError

# A column reference: a name, several names, or a callable picking names
# from the column catalog.
ColumnRef = Union[str, Sequence[str], Callable[[List[str]], Iterable[str]]]


class Dataset(ABC):
    """Abstract base class for read-only tabular data.

    Rows are addressed by 0-based position. Implementations must return
    the same row order on every call.
    """

    @property
    @abstractmethod
    def n_rows(self) -> int:
        """Number of records."""
        pass

    @property
    @abstractmethod
    def columns(self) -> List[str]:
        """Column names in schema order."""
        pass

    @abstractmethod
    def _get_column(self, name: str) -> ArrayLike:
        """Return the values of an existing column."""
        pass

    def __len__(self) -> int:
        """Number of records."""
        return self.n_rows

    def has_column(self, name: str) -> bool:
        """Whether the schema contains a column called ``name``."""
        return name in self.columns

    def column(self, name: str) -> ArrayLike:
        """Return the values of column ``name``.

        Raises:
            ConfigurationError: If the column is not in the schema.
        """
        if not self.has_column(name):
            raise ConfigurationError(
                f"Column '{name}' not found. Available: {self.columns}"
            )
        return self._get_column(name)

    def select(self, ref: ColumnRef) -> List[str]:
        """Resolve a column reference against the schema.

        Args:
            ref: Column name, sequence of names, or a callable receiving the
                list of column names and returning the selected ones.

        Returns:
            Selected column names, de-duplicated, in selection order. May be
            empty when a callable selects nothing.

        Raises:
            ConfigurationError: If any named column does not exist.
        """
        if callable(ref):
            names = list(ref(list(self.columns)))
        elif isinstance(ref, str):
            names = [ref]
        else:
            names = list(ref)

        missing = [name for name in names if not self.has_column(name)]
        if missing:
            raise ConfigurationError(
                f"Column(s) {missing} not found. Available: {self.columns}"
            )
        return list(dict.fromkeys(names))
