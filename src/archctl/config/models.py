"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, archctl.toml only holds
overrides. Each section is a field of :class:`ArchSettings`, so an empty
file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from archctl.domain.versioning import DEFAULT_FORK_HYPOTHESIS


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    file: str = "arrangements.yaml"


class ForkConfig(BaseModel):
    """[fork] section — texts stamped onto every fork."""

    model_config = {"frozen": True}

    name_suffix: str = " (Fork)"
    label_suffix: str = ".1"
    hypothesis: str = DEFAULT_FORK_HYPOTHESIS


class IdsConfig(BaseModel):
    """[ids] section."""

    model_config = {"frozen": True}

    strategy: Literal["counter", "uuid"] = "counter"
    arrangement_prefix: str = "arr"
    container_prefix: str = "cont"
