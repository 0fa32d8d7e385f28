"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, linecmd.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from linecmd.domain.command import DEFAULT_MAX_DEPTH


class InterpreterConfig(BaseModel):
    """[interpreter] section."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)
    nested: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    discover: bool = True
    local_dir: str = ".linecmd/plugins"
    disabled: list[str] = Field(default_factory=list)


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    prompt: str = "> "
    exit_words: list[str] = Field(default_factory=lambda: ["exit", "quit"])
