import json
import os
import subprocess
import sys
from pathlib import Path

import pyarrow.parquet as pq

from fibdrv_core.device import FibDevice
from fibdrv_core.protocol import MAX_INDEX
from fibdrv_core.sequence import fib_sequence
from fibdrv_sweep.table import sweep_device, write_sweep
from fibdrv_verify.logic import check_rows, verify_sweep
from fibdrv_verify.merkle import integrity_root

REPO = Path(__file__).resolve().parents[1]


def run(args, cwd=REPO):
    env = dict(os.environ)
    env["PYTHONPATH"] = str(REPO / "src") + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run([sys.executable, *args], cwd=cwd, env=env, check=False, capture_output=True, text=True)


def test_sweep_device_reads_every_index():
    dev = FibDevice()
    rows = sweep_device(dev, MAX_INDEX)
    assert [r["index"] for r in rows] == list(range(MAX_INDEX + 1))
    assert all(r["value"] == fib_sequence(r["index"]) for r in rows)
    assert rows[10]["text"] == "55"
    assert not dev.in_use


def test_write_and_verify_sweep(tmp_path):
    rows = sweep_device(FibDevice(), 30)
    manifest = write_sweep(rows, tmp_path, 30, 30, timestamp="2026-01-01T00:00:00Z")
    assert manifest["rows"] == 31
    assert manifest["integrity"]["files"] == ["table/sequence.parquet"]

    table = pq.read_table(tmp_path / "table" / "sequence.parquet")
    assert table.schema.names == ["index", "value", "text"]
    assert str(table.schema.field("value").type) == "uint64"

    assert verify_sweep(tmp_path) == {"status": "PASS", "error_count": 0, "errors": []}


def test_verify_flags_missing_layout(tmp_path):
    result = verify_sweep(tmp_path)
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_LAYOUT_MISSING"


def test_check_rows_detects_bad_rows():
    rows = [{"index": i, "value": fib_sequence(i), "text": str(fib_sequence(i))} for i in range(6)]
    assert check_rows(rows, 5) is None
    assert check_rows(rows[:-1], 5)["errors"][0]["code"] == "E_INDEX_GAP"

    bad_text = [dict(r) for r in rows]
    bad_text[3]["text"] = "not enough buffer size"
    assert check_rows(bad_text, 5)["errors"][0]["code"] == "E_TEXT_MISMATCH"

    bad_value = [dict(r) for r in rows]
    bad_value[4]["value"] = 4
    bad_value[4]["text"] = "4"
    err = check_rows(bad_value, 5)["errors"][0]
    assert err["code"] == "E_SEQUENCE_MISMATCH"
    assert err["index"] == 4


def test_sweep_and_verify_cli(tmp_path):
    out = tmp_path / "sweep"
    r = run(["-m", "fibdrv_sweep.cli", str(out), "--gold"])
    assert r.returncode == 0, r.stderr + r.stdout
    assert "PASS" in r.stdout

    manifest = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["created"] == "2026-01-01T00:00:00Z"
    assert manifest["max_index"] == MAX_INDEX

    r = run(["-m", "fibdrv_verify.cli", "sweep", str(out)])
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout)["status"] == "PASS"

    # Flip one byte inside the table body and ensure failure
    table = out / "table" / "sequence.parquet"
    b = bytearray(table.read_bytes())
    b[len(b) // 2] ^= 0x01
    table.write_bytes(bytes(b))

    r = run(["-m", "fibdrv_verify.cli", "sweep", str(out)])
    assert r.returncode != 0
    assert json.loads(r.stdout)["errors"][0]["code"] == "E_INTEGRITY_MISMATCH"


def test_small_buffer_sweep_fails_verification(tmp_path):
    out = tmp_path / "tiny"
    r = run(["-m", "fibdrv_sweep.cli", str(out), "--max-index", "20", "--buffer-size", "3"])
    assert r.returncode == 0, r.stderr + r.stdout

    r = run(["-m", "fibdrv_verify.cli", "sweep", str(out)])
    assert r.returncode != 0
    assert json.loads(r.stdout)["errors"][0]["code"] == "E_TEXT_MISMATCH"


def test_client_prints_every_offset():
    r = run(["tools/client.py", "10"])
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Reading from /dev/fibonacci at offset 10, returned the sequence 55." in r.stdout
    assert r.stdout.count("Reading from") == 22


def _rewrite_manifest(sweep_dir, files):
    path = sweep_dir / "manifest.json"
    manifest = json.loads(path.read_text(encoding="utf-8"))
    manifest["integrity"]["files"] = files
    manifest["integrity"]["root"] = integrity_root(sweep_dir, files)
    path.write_text(json.dumps(manifest), encoding="utf-8")


def test_verify_requires_table_under_integrity_root(tmp_path):
    write_sweep(sweep_device(FibDevice(), 10), tmp_path, 10, 30)
    (tmp_path / "table" / "sequence.parquet").write_bytes(b"garbage, not a table")
    _rewrite_manifest(tmp_path, [])

    result = verify_sweep(tmp_path)
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_INTEGRITY_MISMATCH"


def test_verify_reports_unreadable_table(tmp_path):
    write_sweep(sweep_device(FibDevice(), 10), tmp_path, 10, 30)
    (tmp_path / "table" / "sequence.parquet").write_bytes(b"PAR1" + bytes(32) + b"PAR1")
    _rewrite_manifest(tmp_path, ["table/sequence.parquet"])

    result = verify_sweep(tmp_path)
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_TABLE_UNREADABLE"


def test_verify_cli_reports_tampered_manifest_as_json(tmp_path):
    out = tmp_path / "sweep"
    write_sweep(sweep_device(FibDevice(), 5), out, 5, 30)
    (out / "table" / "sequence.parquet").write_bytes(b"garbage")
    _rewrite_manifest(out, [])

    r = run(["-m", "fibdrv_verify.cli", "sweep", str(out)])
    assert r.returncode == 1, r.stderr + r.stdout
    assert "Traceback" not in r.stderr
    assert json.loads(r.stdout)["status"] == "FAIL"


def test_check_rows_reports_missing_columns():
    rows = [{"value": 0, "text": "0"}]
    assert check_rows(rows, 0)["errors"][0]["code"] == "E_TABLE_UNREADABLE"
