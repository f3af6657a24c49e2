import json

import pytest
from PIL import Image

from metercal import __main__ as entry
from metercal.calibration import cli as judge_cli
from metercal.ocr_pipeline import MockTextSource, PreprocessingTextSource
from metercal.ocr_pipeline import cli as extract_cli


def test_build_text_source():
    assert isinstance(extract_cli.build_text_source(use_mocks=True), MockTextSource)
    assert isinstance(extract_cli.build_text_source(use_mocks=False), PreprocessingTextSource)


def test_extract_cli_with_text(capsys):
    extract_cli.main(["--text", "Meter reads 045678 units"])

    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["candidate_reading"] == "045678"
    assert payload[0]["reading_stage"] == "digit_run"
    assert payload[0]["needs_manual_entry"] is False


def test_extract_cli_flags_manual_entry(capsys):
    extract_cli.main(["--text", "#12345#"])

    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["reading_stage"] == "none"
    assert payload[0]["needs_manual_entry"] is True


def test_extract_cli_runs_with_mock_text_source(tmp_path):
    img_path = tmp_path / "meter.png"
    Image.new("RGB", (30, 10), color="white").save(img_path)
    out_path = tmp_path / "out.json"

    extract_cli.main([
        "--images",
        img_path.as_posix(),
        "--out",
        out_path.as_posix(),
        "--use-mocks",
    ])

    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload[0]["candidate_reading"] == "123.45"
    assert payload[0]["manufacturer"] == "Neptune"
    assert payload[0]["nominal_size"] == '5/8"'


def test_extract_cli_reads_text_file_and_barcodes(tmp_path, capsys):
    text_path = tmp_path / "ocr.txt"
    text_path.write_text("0456 78 CF", encoding="utf-8")

    extract_cli.main(["--text-file", text_path.as_posix(), "--barcode", "code128:NT12345678"])

    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["candidate_reading"] == "0456.78"
    assert payload[0]["manufacturer"] == "Neptune"
    assert payload[0]["serial_number"] == "NT12345678"


def test_extract_cli_rejects_bad_barcode():
    with pytest.raises(SystemExit):
        extract_cli.main(["--text", "0042.7", "--barcode", "nopayload"])


def test_extract_cli_requires_input():
    with pytest.raises(SystemExit):
        extract_cli.main([])


def test_judge_cli(capsys):
    judge_cli.main(["--class", "Multi-Jet", "--phase", "low", "--accuracy", "97.0"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["passes"] is True
    assert payload["band"] == {"min_percent": 97.0, "max_percent": 103.0}


def test_judge_cli_table_with_variant(tmp_path):
    out_path = tmp_path / "table.json"

    judge_cli.main(["--table", "--pd-low-flow-max", "101.0", "--out", out_path.as_posix()])

    rows = json.loads(out_path.read_text(encoding="utf-8"))
    assert rows[0] == {
        "class": "Positive Displacement & Single-Jet",
        "phase": "Low Flow",
        "min_percent": 95.0,
        "max_percent": 101.0,
    }
    assert len(rows) == 21


@pytest.mark.parametrize(
    "argv",
    [
        ["--phase", "low"],
        ["--phase", "turbo", "--accuracy", "99"],
        ["--table", "--pd-low-flow-max", "100"],
    ],
)
def test_judge_cli_usage_errors(argv):
    with pytest.raises(SystemExit):
        judge_cli.main(argv)


def test_module_entry_prints_help(capsys):
    entry.main(["help"])

    assert "python -m metercal" in capsys.readouterr().out


def test_module_entry_rejects_unknown_command():
    with pytest.raises(SystemExit):
        entry.main(["bogus"])
