"""Command-line interface for packtok."""

from __future__ import annotations

import argparse
import codecs
import io
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from packtok.errors import PacktokError
from packtok.tokens import Token

OUTPUT_FORMATS = ("table", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    input_file: Path | None
    output_file: Path | None
    source_file: Path | None
    words: list[str]
    encoding: str
    output_format: str
    show_text: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover packtok.toml)",
    )
    common.add_argument(
        "--encoding",
        default=None,
        metavar="NAME",
        help="Source text encoding (default: utf-8)",
    )
    common.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Report format (default: table)",
    )
    common.add_argument(
        "--no-text",
        dest="show_text",
        action="store_false",
        default=None,
        help="Omit token text from reports",
    )
    common.add_argument("--debug", action="store_true", help="Dump tokens to stderr")

    p = argparse.ArgumentParser(
        prog="packtok",
        description="Classify source words into compact tokens and recover their text",
    )
    sub = p.add_subparsers(dest="command", required=True)

    scan_p = sub.add_parser("scan", parents=[common], help="Tokenize a source file")
    scan_p.add_argument("input", help="Source file")
    scan_p.add_argument("-o", "--output", help="Write packed tokens here (default: report)")

    show_p = sub.add_parser("show", parents=[common], help="Print the text of packed tokens")
    show_p.add_argument("input", help="Packed token file")
    show_p.add_argument("-s", "--source", required=True, help="Source file the tokens came from")

    classify_p = sub.add_parser("classify", parents=[common], help="Classify literal words")
    classify_p.add_argument("words", nargs="+", metavar="WORD")

    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "packtok.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def check_encoding(name: str) -> str:
    """Validate an ASCII-compatible codec name, returning it unchanged."""
    try:
        codecs.lookup(name)
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding: {name}") from None
    # Words are split at ASCII bytes, so the encoding must keep them intact.
    try:
        ascii_compatible = "(\r\n".encode(name) == b"(\r\n"
    except (LookupError, UnicodeError):
        ascii_compatible = False
    if not ascii_compatible:
        raise argparse.ArgumentTypeError(f"encoding is not ASCII-compatible: {name}")
    return name


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input) if getattr(args, "input", None) else None
    source_file = Path(args.source) if getattr(args, "source", None) else None

    anchor = source_file or input_file
    search_dir = anchor.parent if anchor is not None else Path(".")
    if not search_dir.parts:
        search_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    # Encoding: default < config < CLI
    encoding = "utf-8"
    cfg_encoding = config.get("encoding")
    if isinstance(cfg_encoding, str):
        encoding = cfg_encoding
    if args.encoding is not None:
        encoding = args.encoding
    encoding = check_encoding(encoding)

    # Output settings: default < config < CLI
    output_format = "table"
    show_text = True
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in OUTPUT_FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config: {cfg_format!r} "
                    f"(expected one of {', '.join(OUTPUT_FORMATS)})"
                )
            output_format = cfg_format
        cfg_show_text = cfg_output.get("show_text")
        if isinstance(cfg_show_text, bool):
            show_text = cfg_show_text
    if args.output_format is not None:
        output_format = args.output_format
    if args.show_text is not None:
        show_text = args.show_text

    output_file = Path(args.output) if getattr(args, "output", None) else None

    return CliOptions(
        command=args.command,
        input_file=input_file,
        output_file=output_file,
        source_file=source_file,
        words=list(getattr(args, "words", None) or []),
        encoding=encoding,
        output_format=output_format,
        show_text=show_text,
        debug=args.debug,
    )


def write_report(
    rows: list[tuple[Token, str | None]],
    options: CliOptions,
    out: TextIO,
) -> None:
    """Write (token, text) rows in the configured format."""
    if options.output_format == "json":
        items = []
        for token, text in rows:
            item: dict[str, Any] = {
                "offset": token.offset,
                "category": token.category.name,
                "ordinal": token.category.value,
            }
            if options.show_text and text is not None:
                item["text"] = text
            items.append(item)
        json.dump(items, out, indent=2)
        out.write("\n")
        return

    for token, text in rows:
        line = f"{token.offset}\t{token.category.name}"
        if options.show_text and text is not None:
            line += f"\t{text!r}"
        out.write(line + "\n")


def run_scan(options: CliOptions, out: TextIO) -> None:
    """Scan and classify a source file; write packed tokens or a report."""
    from packtok.classify import classify_words
    from packtok.codec import encode_sequence
    from packtok.debug import dump_tokens
    from packtok.locate import iter_texts
    from packtok.scanner import scan

    assert options.input_file is not None
    data = options.input_file.read_bytes()
    tokens = classify_words(scan(data, options.encoding))

    if options.debug:
        dump_tokens(tokens, io.BytesIO(data), encoding=options.encoding)

    if options.output_file:
        options.output_file.write_bytes(encode_sequence(tokens))
        print(f"Wrote {len(tokens)} tokens to {options.output_file}", file=sys.stderr)
        return

    rows = list(iter_texts(tokens, io.BytesIO(data), options.encoding))
    write_report(rows, options, out)


def run_show(options: CliOptions, out: TextIO) -> None:
    """Decode a packed token file and print each token with its source text."""
    from packtok.codec import decode, iter_packed
    from packtok.debug import dump_tokens
    from packtok.locate import token_text_packed

    assert options.input_file is not None and options.source_file is not None
    packed = list(iter_packed(options.input_file.read_bytes()))
    tokens = [decode(record) for record in packed]

    rows: list[tuple[Token, str | None]] = []
    with open(options.source_file, "rb") as source:
        if options.debug:
            dump_tokens(tokens, source, encoding=options.encoding)
        for token in tokens:
            text = None
            if options.show_text:
                text = token_text_packed(token, packed, source, options.encoding)
            rows.append((token, text))

    write_report(rows, options, out)


def run_classify(options: CliOptions, out: TextIO) -> None:
    """Classify each literal word given on the command line."""
    from packtok.classify import classify
    from packtok.debug import dump_tokens

    tokens = [classify(0, word) for word in options.words]
    if options.debug:
        dump_tokens(tokens)
    write_report(list(zip(tokens, options.words)), options, out)


_COMMANDS = {
    "scan": run_scan,
    "show": run_show,
    "classify": run_classify,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    filename = str(options.source_file or options.input_file or "<args>")
    try:
        _COMMANDS[options.command](options, sys.stdout)
    except PacktokError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0
