"""Upload file format settings.

The column delimiter is an operator setting, never taken from the uploaded
text itself. ``BULKUPLOAD_COLUMN_DELIMITER`` accepts a single character or the
word ``tab``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_COLUMN_DELIMITER: Final[str] = ","
DEFAULT_LIST_SEPARATOR: Final[str] = ";"
DEFAULT_HEADER_SEPARATOR: Final[str] = "/"

_DELIMITER_ALIASES: Final[dict[str, str]] = {"tab": "\t", "\\t": "\t"}


@dataclass(frozen=True, slots=True)
class UploadFormatConfig:
    column_delimiter: str = DEFAULT_COLUMN_DELIMITER
    list_separator: str = DEFAULT_LIST_SEPARATOR
    header_separator: str = DEFAULT_HEADER_SEPARATOR

    def __post_init__(self) -> None:
        if len(self.column_delimiter) != 1:
            raise ConfigurationError(
                f"Column delimiter must be a single character, got {self.column_delimiter!r}"
            )
        if not self.list_separator or not self.header_separator:
            raise ConfigurationError("List and header separators must not be empty")
        if self.column_delimiter in (self.list_separator, self.header_separator):
            raise ConfigurationError("Column delimiter clashes with a cell separator")


def get_upload_format_config() -> UploadFormatConfig:
    raw = optional_env_var("BULKUPLOAD_COLUMN_DELIMITER")
    if raw is None:
        return UploadFormatConfig()
    delimiter = _DELIMITER_ALIASES.get(raw.strip().lower(), raw)
    return UploadFormatConfig(column_delimiter=delimiter)
