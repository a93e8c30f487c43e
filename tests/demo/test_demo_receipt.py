"""
Demonstration test for the reference basket receipt script.

Run with:
    python -m pytest tests/demo/test_demo_receipt.py -v -s
"""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "demo_receipt.py"


@pytest.fixture(scope="module")
def demo():
    spec = importlib.util.spec_from_file_location("demo_receipt", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


EXPECTED = """\
Book: 48.50
Imported Calculator: 15.55
Imported Medicine: 8.70
Sales Taxes: 3.60
Total: 72.75
"""


def test_prints_reference_receipt(demo, capsys):
    assert demo.main([]) == 0
    assert capsys.readouterr().out == EXPECTED


def test_custom_presets_file(demo, capsys, tmp_path):
    presets = tmp_path / "presets.yaml"
    presets.write_text('presets:\n  sales: "0.10"\n  import: "0.05"\n  eco: "0"\n')

    assert demo.main(["--presets", str(presets)]) == 0
    out = capsys.readouterr().out.splitlines()
    # 12.25: 1.225 -> 1.25 sales, 0.6125 -> 0.65 import
    assert out[1] == "Imported Calculator: 14.15"
    # 8.40: 0.42 -> 0.45 import
    assert out[2] == "Imported Medicine: 8.85"


def test_missing_presets_file(demo, capsys, tmp_path):
    assert demo.main(["--presets", str(tmp_path / "absent.yaml")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_invalid_presets_file(demo, capsys, tmp_path):
    presets = tmp_path / "presets.yaml"
    presets.write_text("presets:\n  sales: 0.18\n")

    assert demo.main(["--presets", str(presets)]) == 1
    assert "error:" in capsys.readouterr().err


def test_malformed_yaml_presets_file(demo, capsys, tmp_path):
    presets = tmp_path / "presets.yaml"
    presets.write_text("presets: [unclosed\n")

    assert demo.main(["--presets", str(presets)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error:")


def test_debug_logs_on_stderr(demo, capsys):
    assert demo.main(["--log-level", "INFO"]) == 0
    captured = capsys.readouterr()
    assert captured.out == EXPECTED
    records = [json.loads(line) for line in captured.err.splitlines() if line]
    messages = [r["message"] for r in records]
    assert "RECEIPT_CONFIG_TRACE" in messages
    assert "RECEIPT_ENGINE_TRACE" in messages
    assert all(r["receipt_id"] == "demo-basket" for r in records)


def test_build_basket(demo):
    from receipt_engines import DEFAULT_PRESETS

    receipt = demo.build_basket(DEFAULT_PRESETS)
    assert receipt.count == 3
    assert str(receipt.total_price) == "72.75"
