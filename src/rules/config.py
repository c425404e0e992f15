from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from contract.artifacts import CodeTarget
from graph.model import LayerType, NodeType

CONFIG_FILENAME = "archgraph.toml"

LayerPolicy = Literal["strict", "relaxed"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_SUFFIXES: dict[NodeType, str] = {
    NodeType.PORT: "Port",
    NodeType.ADAPTER: "Adapter",
    NodeType.USECASE: "UseCase",
}


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class LayerRule(_StrictModel):
    """Override of the layers one source layer may depend on."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_layer: LayerType = Field(alias="from", description="Source layer name")
    to: list[LayerType] = Field(
        default_factory=list,
        description="List of layer names this layer may depend on",
    )


class LayersConfig(_StrictModel):
    """Allowed-dependency policy between layers."""

    policy: LayerPolicy = Field(
        default="strict",
        description="'relaxed' also lets infrastructure depend on application",
    )
    rules: list[LayerRule] = Field(
        default_factory=list,
        description="Per-layer overrides of the policy table (last rule wins)",
    )
    allow_same_layer: bool = Field(
        default=False,
        description="Also allow dependencies between nodes of the same layer",
    )


class NamingConfig(_StrictModel):
    """Naming convention checks."""

    enabled: bool = Field(default=True, description="Emit suffix naming warnings")
    suffixes: dict[NodeType, str] = Field(
        default_factory=lambda: dict(DEFAULT_SUFFIXES),
        description="Required name suffix per node type",
    )

    @field_validator("suffixes", mode="before")
    @classmethod
    def merge_default_suffixes(cls, v: Any) -> Any:
        """Overlay configured suffixes on the defaults.

        Note: this runs in `mode="before"` so a partial table such as
        ``{port = "Gateway"}`` keeps the adapter and use-case defaults.
        """
        if v is None:
            return dict(DEFAULT_SUFFIXES)

        if not isinstance(v, dict):
            msg = "naming.suffixes must be a mapping of node type -> suffix"
            raise ValueError(msg)

        merged: dict[Any, Any] = {key.value: value for key, value in DEFAULT_SUFFIXES.items()}
        merged.update(v)
        return merged


class CodegenConfig(_StrictModel):
    default_target: CodeTarget = Field(
        default=CodeTarget.TYPESCRIPT,
        description="Target used when none is given on the command line",
    )


class ArchGraphConfig(_StrictModel):
    """Configuration for validation, metrics and code generation."""

    output_dir: str = Field(
        default="generated",
        description="Output directory for generated sources",
    )
    log_level: LogLevel = Field(default="WARNING", description="Root log level")
    layers: LayersConfig = Field(
        default_factory=LayersConfig,
        description="Layer dependency policy",
    )
    naming: NamingConfig = Field(
        default_factory=NamingConfig,
        description="Naming convention checks",
    )
    codegen: CodegenConfig = Field(
        default_factory=CodegenConfig,
        description="Code generation defaults",
    )


class ConfigError(Exception):
    """Raised for an unreadable archgraph.toml or an unusable output_dir."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve the configured output directory under ``root``.

    Only non-empty relative paths that stay inside the root once symlinks
    and ``..`` are resolved are accepted.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)
    if output_dir.startswith("~") or Path(output_dir).is_absolute():
        msg = f"output_dir '{output_dir}' must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        project_root = root.resolve()
        target = (project_root / output_dir).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    if not target.is_relative_to(project_root):
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg)
    return target


def load_config(root: Path) -> ArchGraphConfig:
    """Read ``archgraph.toml`` from ``root``; defaults apply when it is absent."""
    config_path = Path(root) / CONFIG_FILENAME
    if not config_path.is_file():
        return ArchGraphConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {config_path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        return ArchGraphConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid config in {config_path}: {exc}"
        raise ConfigError(msg) from exc
