"""Resolver configuration.

Settings for proof search, validated with pydantic and loadable from a
YAML file. The defaults reproduce unbounded depth-first search; set
``max_depth`` to turn runaway recursion into a DepthLimitExceeded error.

Usage:
    from backchain.config import load_config
    config = load_config("/path/to/resolver.yaml")
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ResolverConfig(BaseModel):
    """Proof search settings."""

    # None means no guard: recursion ends only in a proof, a failure, or RecursionError
    max_depth: int | None = Field(default=None, ge=1)
    trace: bool = False
    fresh_start: int = Field(default=1, ge=1)


def load_config(path: str | Path) -> ResolverConfig:
    """Load resolver settings from YAML.

    Accepts the fields at top level or nested under a ``resolver`` key.

    Raises:
        FileNotFoundError: if path does not exist
        pydantic.ValidationError: on invalid values
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Resolver config not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if isinstance(raw, dict) and "resolver" in raw:
        raw = raw["resolver"] or {}

    config = ResolverConfig.model_validate(raw)
    logger.debug("Loaded resolver config from %s: %s", path, config)
    return config
