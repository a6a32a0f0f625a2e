# src/nodecompat/core/config.py
"""
Configuration schema and loading for nodecompat builds.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class RenderSettings(BaseModel):
    """Limits applied when rendering guides and the matrix.

    Example YAML:
        render:
          guide_limit: 10
          matrix_top_n: 50
    """

    model_config = {"frozen": True}

    guide_limit: int = Field(
        default=10,
        ge=0,
        description="Maximum entries in each 'Can Receive From' / 'Can Connect To' list",
    )
    matrix_top_n: int = Field(
        default=30,
        ge=0,
        description="Number of leading nodes included in the compatibility matrix table",
    )
    recommend_limit: int = Field(
        default=10,
        ge=0,
        description="Default number of recommendations returned by the recommend command",
    )


class OutputSettings(BaseModel):
    """Where build artifacts are written.

    Example YAML:
        output:
          directory: output/resources
          guides_subdir: connections
    """

    model_config = {"frozen": True}

    directory: Path = Field(default=Path("output"), description="Root directory for generated files")
    matrix_json: str = Field(default="compatibility-matrix.json", description="Matrix cache file name")
    matrix_markdown: str = Field(default="compatibility-matrix.md", description="Matrix table file name")
    guides_subdir: str = Field(default="connections", description="Subdirectory for per-node guides")

    @field_validator("matrix_json", "matrix_markdown", "guides_subdir")
    @classmethod
    def validate_relative_name(cls, v: str) -> str:
        """File names must stay inside the output directory."""
        if not v or Path(v).is_absolute() or ".." in Path(v).parts:
            raise ValueError(f"must be a relative name inside the output directory, got {v!r}")
        return v


class NodeCompatSettings(BaseModel):
    """Top-level nodecompat configuration.

    Example YAML:
        nodes_file: data/cache/node-io-config.json
        render:
          matrix_top_n: 50
        output:
          directory: output/resources
    """

    model_config = {"frozen": True}

    nodes_file: Path | None = Field(
        default=None,
        description="Node catalog (JSON or YAML) used when --nodes is not given",
    )
    render: RenderSettings = Field(default_factory=RenderSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def load_settings(config_path: Path) -> NodeCompatSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (NODECOMPAT_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: NODECOMPAT_RENDER__MATRIX_TOP_N for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated NodeCompatSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="NODECOMPAT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return NodeCompatSettings(**_lower_keys(raw_config))


def _lower_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Lowercase nested keys (env overrides arrive uppercase)."""
    return {str(k).lower(): _lower_keys(v) if isinstance(v, dict) else v for k, v in config.items()}
