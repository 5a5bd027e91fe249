"""Configuration management for the chat-markdown CLI.

Reads/writes a TOML config file and provides a typed Config dataclass.
Default location: ``~/.config/chat-markdown/config.toml``.
Override with the ``CHAT_MARKDOWN_CONFIG`` environment variable.

Example::

    [export]
    mode = "per_month"
    output_dir = "./output"
    timezone = "Asia/Tokyo"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from datetime import UTC, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chat_markdown.core.types import ExportMode

_DEFAULT_CONFIG_DIR = Path("~/.config/chat-markdown").expanduser()
_DEFAULT_OUTPUT_DIR = Path("./output")


def _config_path() -> Path:
    env = os.environ.get("CHAT_MARKDOWN_CONFIG")
    if env:
        return Path(env).expanduser()
    return _DEFAULT_CONFIG_DIR / "config.toml"


@dataclass
class Config:
    export_mode: str = ExportMode.PER_CHAT.value
    output_dir: str = str(_DEFAULT_OUTPUT_DIR)

    # IANA zone name used for grouping keys and file-name dates
    timezone: str = "UTC"

    @property
    def mode(self) -> ExportMode:
        return ExportMode(self.export_mode)

    @property
    def tz(self) -> tzinfo:
        """Resolve :attr:`timezone`. Raises ``ValueError`` for unknown zones."""
        if self.timezone.upper() == "UTC":
            return UTC
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{self.timezone}'") from exc

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


def load_config() -> Config:
    """Load config from disk, falling back to defaults + env overrides."""
    path = _config_path()
    cfg = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        export_section = data.get("export", {})

        cfg.export_mode = export_section.get("mode", cfg.export_mode)
        cfg.output_dir = export_section.get("output_dir", cfg.output_dir)
        cfg.timezone = export_section.get("timezone", cfg.timezone)

    # Environment variables always take precedence
    cfg.export_mode = os.environ.get("CHAT_MARKDOWN_EXPORT_MODE", cfg.export_mode)
    cfg.output_dir = os.environ.get("CHAT_MARKDOWN_OUTPUT_DIR", cfg.output_dir)
    cfg.timezone = os.environ.get("CHAT_MARKDOWN_TIMEZONE", cfg.timezone)

    return cfg


def save_config(cfg: Config) -> Path:
    """Write config to the TOML file. Returns the path written."""
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "[export]",
        f'mode = "{cfg.export_mode}"',
        f'output_dir = "{cfg.output_dir}"',
        f'timezone = "{cfg.timezone}"',
        "",
    ]

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def config_exists() -> bool:
    return _config_path().exists()


def config_path_display() -> str:
    return str(_config_path())
