from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from fibdrv_core.device import FibDevice
from fibdrv_core.protocol import DEVICE_PATH, MAX_INDEX, SEEK_SET, WRITE_STATUS
from fibdrv_verify.const import MANIFEST, SWEEP_TABLE
from fibdrv_verify.merkle import integrity_root

SCHEMA = pa.schema(
    [
        ("index", pa.int32()),
        ("value", pa.uint64()),
        ("text", pa.string()),
    ]
)

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def sweep_device(device: FibDevice, max_index: int = MAX_INDEX) -> list[dict]:
    """Read every index 0..max_index through a single device session."""
    if not 0 <= max_index <= MAX_INDEX:
        raise ValueError(f"max_index {max_index} outside [0, {MAX_INDEX}]")

    rows: list[dict] = []
    buf = bytearray(device.buffer_size)

    with device.open() as f:
        for i in range(max_index + 1):
            pos = f.seek(i, SEEK_SET)
            if pos != i:
                raise ValueError(f"seek drift: asked for {i}, landed on {pos}")

            value = f.read(buf, len(buf))
            text = bytes(buf).split(b"\x00", 1)[0].decode("ascii")

            rows.append({"index": i, "value": value, "text": text})

        # The device accepts writes without changing state.
        status = f.write(b"\x00")
        if status != WRITE_STATUS:
            raise ValueError(f"unexpected write status {status}")

    return rows


def write_sweep(
    rows: list[dict],
    out_path: Path,
    max_index: int,
    buffer_size: int,
    timestamp: str | None = None,
) -> dict:
    """Write the sweep table and its manifest. Returns the manifest."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")

    out_path = Path(out_path)
    (out_path / SWEEP_TABLE).parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(rows, columns=[f.name for f in SCHEMA]).sort_values("index")
    table = pa.Table.from_pandas(df, schema=SCHEMA, preserve_index=False)
    pq.write_table(table, out_path / SWEEP_TABLE)

    files_rel = sorted(
        f.relative_to(out_path).as_posix()
        for f in out_path.rglob("*")
        if f.is_file() and f.name != MANIFEST
    )

    manifest = {
        "spec": "1.0",
        "created": timestamp,
        "device": DEVICE_PATH,
        "max_index": int(max_index),
        "buffer_size": int(buffer_size),
        "rows": len(rows),
        "integrity": {
            "schema": "fibdrv-sweep-v1",
            "algorithm": "sha256",
            "files": files_rel,
            "root": integrity_root(out_path, files_rel),
        },
    }
    (out_path / MANIFEST).write_bytes(json.dumps(manifest, **CANONICAL_JSON_KW).encode("utf-8"))
    return manifest
