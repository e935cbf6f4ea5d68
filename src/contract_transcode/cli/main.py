# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the contract-transcode command-line interface."""

import argparse
import json
import logging
import sys
from pathlib import Path

from yachalk import chalk

from contract_transcode.config import TranscodeConfig, find_config, load_config
from contract_transcode.errors import TranscodeError
from contract_transcode.json_form import from_json, to_json
from contract_transcode.literal.display import format_value
from contract_transcode.model.calls import CallKind
from contract_transcode.model.values import Value
from contract_transcode.transcoder import ContractTranscoder

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the contract-transcode CLI."""
    parser = argparse.ArgumentParser(
        prog="contract-transcode",
        description="Encode smart-contract calls and decode their results using the contract metadata.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print debug logging to stderr",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: .contract-transcode.yaml in the current directory, if present)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # encode subcommand
    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode a constructor or message call",
        description="Encode the call data for a constructor or message from literal arguments.",
    )
    encode_parser.add_argument("metadata", type=Path, help="Path to the contract metadata JSON file")
    encode_parser.add_argument("name", help="Name of the constructor or message")
    encode_parser.add_argument("args", nargs="*", default=[], help="Arguments in literal syntax, e.g. 'Some(5)'")
    encode_parser.add_argument(
        "--json-args",
        action="store_true",
        help="Read each argument as a JSON document instead of literal syntax",
    )

    # decode subcommand
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode call data, an event or a return value",
        description="Decode wire bytes using the contract metadata.",
    )
    decode_parser.add_argument("metadata", type=Path, help="Path to the contract metadata JSON file")
    decode_parser.add_argument(
        "kind",
        choices=["message", "constructor", "event", "return"],
        help="What the data is",
    )
    decode_parser.add_argument("--data", required=True, help="Hex-encoded bytes, with or without 0x")
    decode_parser.add_argument("--name", help="Message whose return value is decoded (kind 'return')")
    decode_parser.add_argument("--type-id", type=int, help="Type id of the return value (kind 'return')")
    decode_parser.add_argument("--signature-topic", help="Hex-encoded signature topic of the event (kind 'event')")
    decode_parser.add_argument("--json", action="store_true", help="Print the decoded value as JSON")

    # selectors subcommand
    selectors_parser = subparsers.add_parser(
        "selectors",
        help="List constructor and message selectors",
        description="List declared selectors and flag those that differ from the hash of their label.",
    )
    selectors_parser.add_argument("metadata", type=Path, help="Path to the contract metadata JSON file")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Load settings and metadata, then dispatch to the subcommand handler."""
    try:
        config = _load_settings(args.config)
        transcoder = ContractTranscoder.load(args.metadata, config.transcoder_options())
        if args.command == "encode":
            return _cmd_encode(args, transcoder)
        if args.command == "decode":
            return _cmd_decode(args, transcoder, config)
        if args.command == "selectors":
            return _cmd_selectors(transcoder)
    except TranscodeError as exc:
        _print_error(str(exc))
        return 1
    return 0


def _load_settings(path: Path | None) -> TranscodeConfig:
    if path is not None:
        return load_config(path)
    found = find_config(Path.cwd())
    return load_config(found) if found is not None else TranscodeConfig()


def _cmd_encode(args: argparse.Namespace, transcoder: ContractTranscoder) -> int:
    """Handle the encode subcommand."""
    call_args: list[str | Value] = list(args.args)
    if args.json_args:
        try:
            call_args = [from_json(json.loads(arg)) for arg in args.args]
        except (json.JSONDecodeError, TypeError) as exc:
            _print_error(f"invalid JSON argument: {exc}")
            return 1
        except RecursionError:
            _print_error("invalid JSON argument: nested too deeply")
            return 1

    data = transcoder.encode_call(args.name, call_args, lenient=args.json_args)
    print(f"{chalk.green('Encoded data:')} 0x{data.hex()}")
    return 0


def _cmd_decode(args: argparse.Namespace, transcoder: ContractTranscoder, config: TranscodeConfig) -> int:
    """Handle the decode subcommand."""
    data = _hex_argument(args.data)
    if data is None:
        _print_error(f"--data is not valid hex: {args.data!r}")
        return 1

    if args.kind == "message":
        value: Value = transcoder.decode_message_call(data)
    elif args.kind == "constructor":
        value = transcoder.decode_constructor_call(data)
    elif args.kind == "event":
        topic = None
        if args.signature_topic is not None:
            topic = _hex_argument(args.signature_topic)
            if topic is None:
                _print_error(f"--signature-topic is not valid hex: {args.signature_topic!r}")
                return 1
        value = transcoder.decode_event(data, topic)
    elif args.name is not None:
        value = transcoder.decode_message_return(args.name, data)
    elif args.type_id is not None:
        value = transcoder.decode_return_value(args.type_id, data)
    else:
        _print_error("decoding a return value needs --name or --type-id")
        return 1

    if args.json or config.output_format == "json":
        print(json.dumps(to_json(value), indent=2, ensure_ascii=False))
    else:
        print(format_value(value))
    return 0


def _cmd_selectors(transcoder: ContractTranscoder) -> int:
    """Handle the selectors subcommand."""
    resolver = transcoder.resolver
    mismatched = {exc.name: exc for exc in resolver.selector_mismatches()}
    for kind in (CallKind.CONSTRUCTOR, CallKind.MESSAGE):
        for spec in resolver.calls(kind):
            line = f"{kind.value:<12} 0x{spec.selector.hex()}  {spec.name}"
            if spec.name in mismatched:
                computed = mismatched[spec.name].computed
                line += " " + chalk.yellow(f"(label hashes to 0x{computed.hex()})")
            print(line)
    return 0


def _hex_argument(text: str) -> bytes | None:
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    try:
        return bytes.fromhex(digits)
    except ValueError:
        return None


def _print_error(message: str) -> None:
    print(f"{chalk.red('Error:')} {message}", file=sys.stderr)
