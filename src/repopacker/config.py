"""Configuration for repository loading and bundle generation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomli
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from repopacker.core.classify import DEFAULT_CODE_EXTENSIONS, DEFAULT_IMAGE_EXTENSIONS
from repopacker.pack.fetch import DEFAULT_CONCURRENCY_LIMIT

DEFAULT_API_BASE = "https://api.github.com"


class PackConfig(BaseModel):
    """Settings shared by the remote client and the bundle pipeline.

    Attributes
    ----------
    concurrency_limit
        Maximum number of content requests in flight at once.
    code_extensions
        Extensions selected when a repository is first loaded.
    image_extensions
        Extensions fetched as binary content.
    token_encoding
        tiktoken encoding used for bundle token counts; None disables counting.
    api_base
        Base URL of the GitHub REST API.
    request_timeout
        Total timeout in seconds for a single HTTP request.
    """

    concurrency_limit: int = Field(default=DEFAULT_CONCURRENCY_LIMIT, ge=1)
    code_extensions: frozenset[str] = DEFAULT_CODE_EXTENSIONS
    image_extensions: frozenset[str] = DEFAULT_IMAGE_EXTENSIONS
    token_encoding: str | None = "cl100k_base"
    api_base: str = DEFAULT_API_BASE
    request_timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("code_extensions", "image_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> Any:
        if isinstance(value, str):
            raise ValueError("Extensions must be a list, not a string")
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(v).lower().lstrip(".") for v in value)
        return value

    @field_validator("api_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_config(path: Path) -> PackConfig:
    """Load a `PackConfig` from a TOML or YAML file.

    TOML files may hold the settings at top level or under
    ``[tool.repopacker]`` (so ``pyproject.toml`` works). Other ``[tool.*]``
    tables are ignored.

    Parameters
    ----------
    path
        Path to a ``.toml``, ``.yaml`` or ``.yml`` file.

    Returns
    -------
    PackConfig
        Validated configuration.

    Raises
    ------
    ValueError
        If the file cannot be read or parsed, has an unsupported suffix, or
        holds invalid settings.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Failed to read config file: {path}") from e

    suffix = path.suffix.lower()
    if suffix == ".toml":
        try:
            data: Any = tomli.loads(text)
        except Exception as e:
            raise ValueError(f"Failed to parse TOML config: {path}") from e
        tool = data.get("tool")
        if isinstance(tool, dict) and "repopacker" in tool:
            data = tool["repopacker"]
            if not isinstance(data, dict):
                raise ValueError(f"[tool.repopacker] must be a table: {path}")
        else:
            data = {k: v for k, v in data.items() if k != "tool"}
    elif suffix in (".yml", ".yaml"):
        try:
            data = yaml.safe_load(text)
        except Exception as e:
            raise ValueError(f"Failed to parse YAML config: {path}") from e
        if data is None:
            data = {}
    else:
        raise ValueError(f"Unsupported config format: {path}")

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")
    try:
        return PackConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e
