from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import tzinfo
from pathlib import Path

from chat_markdown import FormatError, ParseResult, normalize, render
from chat_markdown.cli import output as out
from chat_markdown.cli.config import (
    Config,
    config_exists,
    config_path_display,
    load_config,
    save_config,
)
from chat_markdown.core.types import ExportMode, OutputFile
from chat_markdown.render.grouping import group_conversations

DESCRIPTION = """\
chat-markdown: convert AI chat exports to Markdown

Reads a ChatGPT conversations.json, a Gemini My Activity or Takeout
export, or any JSON file holding conversations, and writes one
Markdown file per chat, per month or per year."""


# ── Helpers ─────────────────────────────────────────────────────────


def _modes() -> list[str]:
    return [m.value for m in ExportMode]


def _load_export(path: Path) -> ParseResult:
    """Read and normalize *path*, exiting with a message on failure."""
    if not path.is_file():
        out.error(f"File not found: {path}")
        sys.exit(1)
    try:
        return normalize(path.read_bytes(), path.name)
    except FormatError as exc:
        out.error(exc.message)
        sys.exit(1)


def _resolve_mode(cfg: Config, override: str | None) -> ExportMode:
    if override:
        return ExportMode(override)
    try:
        return cfg.mode
    except ValueError:
        out.error(
            f"Unknown export mode '{cfg.export_mode}'. Choose from: {', '.join(_modes())}"
        )
        sys.exit(1)


def _require_tz(cfg: Config) -> tzinfo:
    try:
        return cfg.tz
    except ValueError as exc:
        out.error(str(exc))
        sys.exit(1)


def _print_summary(path: Path, result: ParseResult) -> None:
    out.kv("File", path)
    out.kv("Source", result.source_kind.value)
    out.kv("Format", result.source_format.value)
    out.kv("Conversations", f"{len(result.conversations):,}")
    out.kv("Messages", f"{result.message_count:,}")


def write_output_files(files: Sequence[OutputFile], directory: Path) -> list[Path]:
    """Write each rendered file into *directory* and return the paths."""
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for file in files:
        target = directory / file.filename
        target.write_text(file.content, encoding="utf-8")
        written.append(target)
    return written


# ── convert / inspect ───────────────────────────────────────────────


def cmd_convert(args: argparse.Namespace) -> None:
    """Normalize an export and write Markdown files."""
    cfg = load_config()
    mode = _resolve_mode(cfg, args.mode)
    tz = _require_tz(cfg)
    path = Path(args.file)

    result = _load_export(path)

    out.header("Converting export")
    _print_summary(path, result)
    print()

    if not result.conversations:
        out.warn("No conversations found, nothing to write.")
        return

    files = render(result.conversations, mode, result.source_kind, tz=tz)
    directory = Path(args.out) if args.out else cfg.output_path
    paths = write_output_files(files, directory)

    out.success(f"Wrote {len(paths)} file(s) to {directory}")
    for written in paths:
        out.written(written.name)


def cmd_inspect(args: argparse.Namespace) -> None:
    """Show what would be converted without writing anything."""
    cfg = load_config()
    tz = _require_tz(cfg)
    path = Path(args.file)

    result = _load_export(path)

    out.header("Export summary")
    _print_summary(path, result)

    if not result.conversations:
        print()
        out.warn("No conversations found.")
        return

    out.header("Output files per mode")
    out.kv(ExportMode.PER_CHAT.value, len(result.conversations))
    for mode in (ExportMode.PER_MONTH, ExportMode.PER_YEAR):
        groups = group_conversations(result.conversations, mode, tz=tz)
        out.kv(mode.value, len(groups))


# ── config ──────────────────────────────────────────────────────────


def cmd_config_show(args: argparse.Namespace) -> None:
    """Display current configuration."""
    cfg = load_config()

    out.header(f"Configuration ({config_path_display()})")
    if not config_exists():
        out.info("(no config file yet, showing defaults)")
    print()
    out.kv("Export mode", cfg.export_mode)
    out.kv("Output dir", cfg.output_dir)
    out.kv("Time zone", cfg.timezone)


def cmd_config_path(args: argparse.Namespace) -> None:
    print(config_path_display())


def cmd_config_set_mode(args: argparse.Namespace) -> None:
    cfg = load_config()
    cfg.export_mode = args.mode
    path = save_config(cfg)
    out.success(f"Export mode set to {args.mode} ({path})")


def cmd_config_set_timezone(args: argparse.Namespace) -> None:
    cfg = load_config()
    cfg.timezone = args.timezone
    _require_tz(cfg)
    path = save_config(cfg)
    out.success(f"Time zone set to {args.timezone} ({path})")


# ── Parser ──────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    modes = _modes()

    parser = argparse.ArgumentParser(
        prog="chat-markdown",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detection and parsing logs",
    )
    sub = parser.add_subparsers(dest="command", title="commands")

    p_convert = sub.add_parser("convert", help="Convert an export file to Markdown")
    p_convert.add_argument("file", help="Path to the exported .json file")
    p_convert.add_argument(
        "--mode",
        choices=modes,
        default=None,
        help="One file per chat, month or year (default: from config)",
    )
    p_convert.add_argument(
        "--out",
        metavar="DIR",
        default=None,
        help="Output directory (default: from config)",
    )

    p_inspect = sub.add_parser(
        "inspect", help="Detect the export format and count conversations"
    )
    p_inspect.add_argument("file", help="Path to the exported .json file")

    p_cfg = sub.add_parser("config", help="View and change settings")
    cfg_sub = p_cfg.add_subparsers(dest="config_command", title="config commands")

    cfg_sub.add_parser("show", help="Show current settings")
    cfg_sub.add_parser("path", help="Print config file location")

    p_cfg_mode = cfg_sub.add_parser("set-mode", help="Set the default export mode")
    p_cfg_mode.add_argument("mode", choices=modes, help="Export mode")

    p_cfg_tz = cfg_sub.add_parser(
        "set-timezone", help="Set the zone used for dates in grouping and file names"
    )
    p_cfg_tz.add_argument("timezone", help="IANA zone name, e.g. Asia/Tokyo")

    return parser


# ── Dispatch ────────────────────────────────────────────────────────

_CommandHandler = Callable[[argparse.Namespace], None]

_COMMAND_MAP: dict[str, _CommandHandler] = {
    "convert": cmd_convert,
    "inspect": cmd_inspect,
}

_CONFIG_MAP: dict[str, _CommandHandler] = {
    "show": cmd_config_show,
    "path": cmd_config_path,
    "set-mode": cmd_config_set_mode,
    "set-timezone": cmd_config_set_timezone,
}


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="  %(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return

    if args.command == "config":
        if not args.config_command:
            parser.parse_args(["config", "--help"])
            return
        handler = _CONFIG_MAP.get(args.config_command)
    else:
        handler = _COMMAND_MAP.get(args.command)

    if handler is None:
        parser.print_help()
        return

    try:
        handler(args)
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
