"""fibdrv - Sweep every index through the device into a verifiable table."""
from __future__ import annotations

from pathlib import Path

import click

from fibdrv_core.device import FibDevice
from fibdrv_core.protocol import MAX_INDEX, RESULT_BUF_LEN
from fibdrv_sweep.table import sweep_device, write_sweep

# Fixed timestamp for a reproducible gold sweep
GOLD_TIMESTAMP = "2026-01-01T00:00:00Z"


def run_sweep(
    out_path: Path,
    max_index: int = MAX_INDEX,
    buffer_size: int = RESULT_BUF_LEN,
    timestamp: str | None = None,
) -> dict:
    device = FibDevice(buffer_size=buffer_size)
    print(f"Sweeping /dev/{device.name}: indices 0..{max_index}")

    rows = sweep_device(device, max_index)
    manifest = write_sweep(rows, out_path, max_index, buffer_size, timestamp)

    print(f"PASS: Sweep written to {out_path}")
    print(f"  Rows: {manifest['rows']}")
    print(f"  Last: fib({rows[-1]['index']}) = {rows[-1]['text']}")
    print(f"  Root: {manifest['integrity']['root']}")
    return manifest


@click.command()
@click.argument("out", type=click.Path(path_type=Path))
@click.option("--max-index", type=click.IntRange(0, MAX_INDEX), default=MAX_INDEX, show_default=True)
@click.option("--buffer-size", type=click.IntRange(0), default=RESULT_BUF_LEN, show_default=True,
              help="Result buffer capacity in bytes")
@click.option("--gold", is_flag=True, help="Use the fixed timestamp for a reproducible sweep")
def main(out: Path, max_index: int, buffer_size: int, gold: bool) -> None:
    """Read fib(0..MAX_INDEX) through the device and write a sweep table."""
    try:
        run_sweep(out, max_index, buffer_size, timestamp=GOLD_TIMESTAMP if gold else None)
    except Exception as e:
        # Fail closed with a single-line reason.
        print(f"FATAL: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
