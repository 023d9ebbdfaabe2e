from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from contract.artifacts import ReportFormat

CONFIG_FILENAME = "modgraph.toml"

ModuleNaming = Literal["path", "class"]

DEFAULT_PROVIDER_SUFFIXES = (
    "Service",
    "Repository",
    "Factory",
    "Handler",
    "Guard",
    "Interceptor",
)
DEFAULT_CONTROLLER_SUFFIXES = ("Controller", "Resolver")


class ExtractionRules(BaseModel):
    """Heuristics applied when reading fields out of a module document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    provider_suffixes: tuple[str, ...] = Field(
        default=DEFAULT_PROVIDER_SUFFIXES,
        description="Name suffixes that mark a provider entry",
    )
    controller_suffixes: tuple[str, ...] = Field(
        default=DEFAULT_CONTROLLER_SUFFIXES,
        description="Name suffixes that mark a controller entry",
    )
    ignored_imports: tuple[str, ...] = Field(
        default=(),
        description="Extra import tokens to drop in addition to the built-in deny-list",
    )

    @field_validator("provider_suffixes", "controller_suffixes")
    @classmethod
    def validate_suffixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty suffixes, which would match every identifier."""
        for suffix in v:
            if not suffix or not suffix.isidentifier():
                msg = f"Invalid suffix {suffix!r}: must be a non-empty identifier"
                raise ValueError(msg)
        return v


class ModGraphConfig(BaseModel):
    """Configuration for module dependency analysis."""

    model_config = ConfigDict(extra="forbid")

    module_globs: list[str] = Field(
        default_factory=lambda: [
            "src/modules/*/*.module.ts",
            "src/shared/*/*.module.ts",
        ],
        description="Glob patterns (relative to root) that select module documents",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = every module document)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    naming: ModuleNaming = Field(
        default="path",
        description="Name modules after their directory ('path') or declared class",
    )
    shared_dirs: list[str] = Field(
        default_factory=lambda: ["shared"],
        description="Directories whose children are named '<dir>/<child>'",
    )
    format: ReportFormat = Field(
        default=ReportFormat.TEXT,
        description="Default report format",
    )
    extraction: ExtractionRules = Field(
        default_factory=ExtractionRules,
        description="Field extraction heuristics",
    )

    @field_validator("module_globs")
    @classmethod
    def validate_module_globs(cls, v: list[str]) -> list[str]:
        if not v:
            msg = "module_globs must contain at least one pattern"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> ModGraphConfig:
    """Load configuration from modgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModGraphConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModGraphConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
