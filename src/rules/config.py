from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from errors import ModVendorError
from utils import split_copy_patterns, split_includes

CONFIG_FILENAME = "modvendor.toml"
PROJECT_MARKER = "go.mod"
VENDOR_DIRNAME = "vendor"
MANIFEST_FILENAME = "modules.txt"


class ModVendorConfig(BaseModel):
    """Configuration for a vendoring run."""

    model_config = ConfigDict(extra="forbid")

    copy_patterns: str = Field(
        default="",
        alias="copy",
        description=(
            "Space-separated glob patterns, e.g. '**/*.c **/*.h **/*.proto' "
            "(empty = every file)"
        ),
    )
    fullcopy: bool = Field(
        default=True,
        description="Vendor every matched file regardless of declared package usage",
    )
    verbose: bool = Field(default=False, description="Log each vendored path")
    include: list[str] = Field(
        default_factory=list,
        description=(
            "Additional package paths to vendor that vendor/modules.txt "
            "does not list"
        ),
    )
    gopath: str | None = Field(
        default=None,
        description="GOPATH holding the module cache (default: $GOPATH or ~/go)",
    )

    @field_validator("include", mode="before")
    @classmethod
    def validate_include(cls, v: Any) -> Any:
        """Accept either a TOML list or a comma-separated string."""

        if v is None:
            return []

        if isinstance(v, str):
            return split_includes(v)

        if not isinstance(v, list) or not all(isinstance(item, str) for item in v):
            msg = "include must be a list of package paths or a comma-separated string"
            raise ValueError(msg)

        return split_includes(v)

    def patterns(self) -> list[str]:
        return split_copy_patterns(self.copy_patterns)

    def with_overrides(self, **overrides: Any) -> ModVendorConfig:
        """Return a copy with every non-None override applied and validated."""
        data = self.model_dump(by_alias=True)
        data.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return ModVendorConfig.model_validate(data)
        except Exception as e:
            msg = f"Invalid options: {e}"
            raise ConfigError(msg) from e


class ConfigError(ModVendorError):
    """Raised when config file exists but cannot be parsed."""


def vendor_root(root: Path) -> Path:
    return root / VENDOR_DIRNAME


def manifest_path(root: Path) -> Path:
    return root / VENDOR_DIRNAME / MANIFEST_FILENAME


def load_config(root: Path) -> ModVendorConfig:
    """Load configuration from modvendor.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModVendorConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModVendorConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
