"""
Configuration management using pydantic.

Config classes use pydantic for typed fields and YAML loading. Semantic
checks (``v >= 2`` and friends) are done by the resampling functions so that
keyword calls and config-driven calls fail with the same ConfigurationError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel


# Base path for config files
CONFIGS_DIR = Path(__file__).parent.parent / "configs"


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Load a YAML file and return as dict."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f) or {}


class VFoldConfig(BaseModel):
    """Configuration for V-fold cross-validation.

    Defaults follow the usual 10-fold, single repeat, unstratified setup.
    """

    v: int = 10
    repeats: int = 1
    strata: Optional[Union[str, List[str]]] = None
    breaks: int = 4  # Quantile bins for a numeric strata column
    pool: float = 0.1  # Categories below this share of rows are pooled
    random_seed: Optional[int] = 42

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> VFoldConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/vfold.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "vfold.yaml"
        return cls(**load_yaml(path))
