"""Exceptions raised by the resampling core."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid resampling arguments or an unresolvable strata reference.

    Raised synchronously before any result is returned; a failed call never
    yields a partial resample set.
    """
