# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the contract-transcode CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from contract_transcode.cli.main import main

ACCOUNT = "0x" + "01" * 32
ACCOUNT_ADDRESS = "5C62Ck4UrFPiBtoCmeSrgF7x9yv9mn38446dhCpsi2mLHiFT"

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Run the CLI with *argv* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["contract-transcode", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings files of the real working directory out of the tests."""
    monkeypatch.chdir(tmp_path)


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch) == 0
    assert "encode" in capsys.readouterr().out


# -------- encode tests --------


def test_encode_message(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "flip") == 0
    assert "0x633aa551" in capsys.readouterr().out


def test_encode_with_arguments(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "transfer", ACCOUNT, "1000") == 0
    assert "0x00000001" + "01" * 32 + "e803" + "00" * 14 in capsys.readouterr().out


def test_encode_constructor(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "new", "true") == 0
    assert "0x9bae9d5e01" in capsys.readouterr().out


def test_encode_json_arguments(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "set_option", '{"Some": 5}', "--json-args") == 0
    assert "0x000000030105000000" in capsys.readouterr().out


def test_encode_invalid_json_argument(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "set_option", "{Some", "--json-args") == 1
    assert "invalid JSON argument" in capsys.readouterr().err


def test_encode_deeply_nested_json_argument(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    argument = "[" * 100_000 + "]" * 100_000
    assert _run(monkeypatch, "encode", str(metadata_file), "set_option", argument, "--json-args") == 1
    assert "invalid JSON argument: nested too deeply" in capsys.readouterr().err


def test_encode_address_argument(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "transfer", ACCOUNT_ADDRESS, "1000") == 0
    assert "0x00000001" + "01" * 32 + "e803" + "00" * 14 in capsys.readouterr().out



def test_encode_unknown_message(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "fli") == 1
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "Did you mean 'flip'?" in err


def test_encode_type_mismatch(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(metadata_file), "transfer", ACCOUNT, "-1") == 1
    assert "value: expected an integer" in capsys.readouterr().err


def test_missing_metadata_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "encode", str(tmp_path / "missing.json"), "flip") == 1
    assert "not found" in capsys.readouterr().err


# -------- decode tests --------


def test_decode_message(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "message", "--data", "0x633aa551") == 0
    assert capsys.readouterr().out.strip() == "flip {}"


def test_decode_constructor(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "constructor", "--data", "9bae9d5e01") == 0
    assert capsys.readouterr().out.strip() == "new { init_value: true }"


def test_decode_event(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "event", "--data", "0101") == 0
    assert capsys.readouterr().out.strip() == "Flipped { new_value: true }"


def test_decode_event_by_topic_as_json(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    data = "01" * 32 + "07" + "00" * 15
    argv = ["decode", str(metadata_file), "event", "--data", data, "--signature-topic", "0x" + "11" * 32, "--json"]
    assert _run(monkeypatch, *argv) == 0
    assert json.loads(capsys.readouterr().out) == {"Transferred": {"to": ACCOUNT_ADDRESS, "value": 7}}


def test_decode_return_by_name(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "return", "--name", "transfer", "--data", "0101") == 0
    assert capsys.readouterr().out.strip() == "Err(InsufficientBalance)"


def test_decode_return_by_type_id(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "return", "--type-id", "8", "--data", "0105000000") == 0
    assert capsys.readouterr().out.strip() == "Some(5)"


def test_decode_return_needs_name_or_type(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "return", "--data", "01") == 1
    assert "--name or --type-id" in capsys.readouterr().err


def test_decode_invalid_hex(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "message", "--data", "0xzz") == 1
    assert "not valid hex" in capsys.readouterr().err


def test_decode_error_exits_with_one(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", str(metadata_file), "message", "--data", "deadbeef") == 1
    assert "invalid discriminant" in capsys.readouterr().err


def test_output_format_from_config(
    tmp_path: Path, metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    (tmp_path / ".contract-transcode.yaml").write_text("output-format: json\n", encoding="utf-8")
    assert _run(monkeypatch, "decode", str(metadata_file), "return", "--name", "get", "--data", "01") == 0
    assert json.loads(capsys.readouterr().out) is True


def test_explicit_config_file(
    tmp_path: Path, metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    config = tmp_path / "strict.yaml"
    config.write_text("case-insensitive-variants: false\n", encoding="utf-8")
    assert _run(monkeypatch, "--config", str(config), "encode", str(metadata_file), "set_option", "some(5)") == 1
    assert "one of: None, Some" in capsys.readouterr().err


def test_invalid_config_file(
    tmp_path: Path, metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("colour: red\n", encoding="utf-8")
    assert _run(monkeypatch, "--config", str(config), "encode", str(metadata_file), "flip") == 1
    assert "unknown setting" in capsys.readouterr().err


# -------- selectors tests --------


def test_selectors(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "selectors", str(metadata_file)) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert lines[0].startswith("constructor")
    assert "0x9bae9d5e  new" in lines[0]
    flip = next(line for line in lines if line.endswith("flip"))
    assert "0x633aa551" in flip
    transfer = next(line for line in lines if "transfer" in line)
    assert "label hashes to 0x" in transfer
