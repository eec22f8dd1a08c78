import json
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from fibdrv_core.decimal import decode_decimal
from fibdrv_core.sequence import iter_sequence
from .const import ERRORS, MANIFEST, SWEEP_TABLE
from .merkle import integrity_root, looks_like_parquet


def _fail(code: str, **detail) -> dict:
    err = {"code": code, "message": ERRORS[code]}
    err.update(detail)
    return {"status": "FAIL", "error_count": 1, "errors": [err]}


def check_rows(rows: list[dict], max_index: int) -> dict | None:
    """Return a FAIL result for the first bad row, or None when all rows hold."""
    try:
        indices = [int(r["index"]) for r in rows]
    except (KeyError, TypeError, ValueError) as e:
        return _fail("E_TABLE_UNREADABLE", detail=str(e))
    if indices != list(range(max_index + 1)):
        return _fail("E_INDEX_GAP", expected_rows=max_index + 1, found_rows=len(indices))

    for r in rows:
        i, value, text = int(r["index"]), r.get("value"), r.get("text")
        try:
            decoded = decode_decimal(text.encode("ascii"))
        except (AttributeError, ValueError, UnicodeEncodeError):
            decoded = None
        if value is None or decoded != value:
            return _fail("E_TEXT_MISMATCH", index=i, text=text, value=value)

    # Reference values come from the bitwise engine itself.
    for (i, expected), r in zip(iter_sequence(max_index), rows):
        value = int(r["value"])
        if value != expected:
            return _fail("E_SEQUENCE_MISMATCH", index=i, expected=expected, found=value)

    return None


def verify_sweep(sweep_dir: Path) -> dict:
    sweep_dir = Path(sweep_dir)
    manifest_path = sweep_dir / MANIFEST
    table_path = sweep_dir / SWEEP_TABLE

    for p in [manifest_path, table_path]:
        if not p.exists():
            return _fail("E_LAYOUT_MISSING", path=str(p))

    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        max_index = int(manifest["max_index"])
        integrity = manifest["integrity"]
        rel_files = [str(rel) for rel in integrity["files"]]
        expected_root = integrity["root"]
    except (ValueError, KeyError, TypeError) as e:
        return _fail("E_MANIFEST_JSON", detail=str(e))

    # The table must be covered by the integrity root, not merely present.
    if SWEEP_TABLE not in rel_files:
        return _fail("E_INTEGRITY_MISMATCH", detail=f"{SWEEP_TABLE} not listed in manifest", files=rel_files)

    try:
        computed = integrity_root(sweep_dir, rel_files)
    except OSError as e:
        return _fail("E_INTEGRITY_MISMATCH", detail=str(e))
    if computed != expected_root:
        return _fail("E_INTEGRITY_MISMATCH", expected=expected_root, computed=computed)

    for rel in rel_files:
        if rel.endswith(".parquet") and not looks_like_parquet(sweep_dir / rel):
            return _fail("E_PARQUET_MAGIC", path=str(sweep_dir / rel))

    try:
        rows = pq.read_table(table_path).to_pylist()
    except (pa.ArrowException, OSError) as e:
        return _fail("E_TABLE_UNREADABLE", path=str(table_path), detail=str(e))

    bad = check_rows(rows, max_index)
    if bad is not None:
        return bad

    return {"status": "PASS", "error_count": 0, "errors": []}
