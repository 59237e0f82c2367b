import json
from pathlib import Path
from typing import Any, Optional

import fsspec
import yaml
from fsspec.implementations.local import LocalFileSystem
from pydantic import BaseModel, ConfigDict, Field


class PaginationConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: int = Field(
        default=4, ge=1, description="Total attempts per page, including the first"
    )
    retry_delay: float = Field(
        default=1.0, ge=0, description="Delay between retry attempts in seconds"
    )
    request_timeout: float = Field(
        default=1.0, gt=0, description="Hard deadline for a single request in seconds"
    )
    page_delay: float = Field(
        default=0.2, ge=0, description="Delay between delivered pages in seconds"
    )
    transport_timeout: float = Field(
        default=60, gt=0, description="Socket-level backstop for abandoned requests"
    )


class ConfigReader:
    """Reads pagination settings from a JSON or YAML file.

    File format is guessed from the extension (.json, .yaml or .yml, any
    case). The settings may fill the whole document or sit under a
    `pagination` key of a larger one:

    ```yaml
    pagination:
      max_retries: 2
      page_delay: 0.5
    ```
    """

    SECTION = "pagination"
    PARSERS = {".json": json.load, ".yaml": yaml.safe_load, ".yml": yaml.safe_load}

    def __init__(self, fs: Optional[fsspec.AbstractFileSystem] = None) -> None:
        """Initializes a config reader."""
        self.fs = fs or LocalFileSystem()

    def read(self, file_path: str) -> dict[str, Any]:
        extension = Path(file_path).suffix.lower()
        parser = self.PARSERS.get(extension)
        if parser is None:
            raise ValueError(f"Unsupported extension: {extension}")

        with self.fs.open(file_path, "r") as f:
            data = parser(f)

        # an empty YAML document parses to None
        if data is None:
            return {}
        if isinstance(data, dict) and self.SECTION in data:
            data = data[self.SECTION] or {}
        if not isinstance(data, dict):
            raise ValueError(
                f"{file_path} must hold a mapping of pagination settings, "
                f"got {type(data).__name__}"
            )
        return data


def load_config(
    file_path: str | None = None,
    overrides: dict[str, Any] | None = None,
    reader: ConfigReader | None = None,
) -> PaginationConfig:
    """
    Builds a PaginationConfig from an optional file and explicit overrides.

    Args:
        file_path (str | None): JSON or YAML file holding config values.
        overrides (dict[str, Any] | None): Values taking precedence over the
            file. Entries set to None are ignored.
        reader (ConfigReader | None): Reader to use, defaults to local files.

    Returns:
        PaginationConfig: The validated config.
    """
    values: dict[str, Any] = {}
    if file_path:
        values.update((reader or ConfigReader()).read(file_path))
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})
    return PaginationConfig.model_validate(values)
