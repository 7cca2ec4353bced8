"""Runtime settings for ``ledger_zipper``.

Settings come from the environment (the CLI loads a local ``.env`` with
``python-dotenv`` first, without overriding variables that are already set),
and explicit overrides (CLI options) win over the environment:

- ``LEDGER_ZIPPER_TIE_BREAK_KEYS``: comma-separated identity keys tried in
  order when two transactions share a date (default ``ID,RID,FITID``).
- ``LEDGER_ZIPPER_ENCODING``: text encoding of input and output files
  (default ``utf-8``).
- ``LEDGER_ZIPPER_LOG_LEVEL``: package log level (see ``logging_setup``).
"""

from __future__ import annotations

import codecs
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError
from .tiebreak import DEFAULT_TIE_BREAK_KEYS, TieBreaker, tie_breakers_for

_ENV_TIE_BREAK_KEYS = "LEDGER_ZIPPER_TIE_BREAK_KEYS"
_ENV_ENCODING = "LEDGER_ZIPPER_ENCODING"
_ENV_LOG_LEVEL = "LEDGER_ZIPPER_LOG_LEVEL"


class ZipperSettings(BaseModel):
    """Validated settings for one merge run."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True, str_strip_whitespace=True)

    tie_break_keys: tuple[str, ...] = DEFAULT_TIE_BREAK_KEYS
    encoding: str = "utf-8"
    log_level: str | None = None

    @field_validator("tie_break_keys")
    @classmethod
    def _keys_well_formed(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        keys = tuple(k.strip() for k in v)
        if not keys:
            raise ValueError("at least one tie-break key is required")
        for k in keys:
            if not k or any(ch.isspace() for ch in k):
                raise ValueError(f"invalid tie-break key {k!r}")
        if len(set(keys)) != len(keys):
            raise ValueError("tie-break keys must be unique")
        return keys

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"unknown encoding {v!r}") from exc
        return v

    def tie_breakers(self) -> tuple[TieBreaker, ...]:
        return tie_breakers_for(self.tie_break_keys)


def _split_keys(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(","))


def load_settings(
    *,
    tie_break_keys: tuple[str, ...] | None = None,
    encoding: str | None = None,
    log_level: str | None = None,
) -> ZipperSettings:
    """Build settings from the environment, applying non-``None`` overrides.

    Raises :class:`ConfigError` with pydantic's message on invalid values.
    """

    values: dict[str, Any] = {}

    env_keys = os.getenv(_ENV_TIE_BREAK_KEYS)
    if env_keys is not None and env_keys.strip():
        values["tie_break_keys"] = _split_keys(env_keys)
    env_encoding = os.getenv(_ENV_ENCODING)
    if env_encoding and env_encoding.strip():
        values["encoding"] = env_encoding
    env_level = os.getenv(_ENV_LOG_LEVEL)
    if env_level and env_level.strip():
        values["log_level"] = env_level

    overrides = {
        "tie_break_keys": tie_break_keys,
        "encoding": encoding,
        "log_level": log_level,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ZipperSettings(**values)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


__all__ = ["ZipperSettings", "load_settings"]
