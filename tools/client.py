"""Walk the device forwards and backwards, printing every value."""
import sys

from fibdrv_core.device import FibDevice
from fibdrv_core.protocol import DEVICE_PATH, MAX_INDEX, RESULT_BUF_LEN, SEEK_SET


def run_client(offset: int = MAX_INDEX) -> None:
    device = FibDevice()
    buf = bytearray(RESULT_BUF_LEN)

    with device.open() as f:
        for i in range(offset + 1):
            sz = f.write(b"")
            print(f"Writing to {DEVICE_PATH}, returned the sequence {sz}")

        for i in range(offset + 1):
            f.seek(i, SEEK_SET)
            f.read(buf, len(buf))
            text = bytes(buf).split(b"\x00", 1)[0].decode("ascii")
            print(f"Reading from {DEVICE_PATH} at offset {i}, returned the sequence {text}.")

        for i in range(offset, -1, -1):
            f.seek(i, SEEK_SET)
            f.read(buf, len(buf))
            text = bytes(buf).split(b"\x00", 1)[0].decode("ascii")
            print(f"Reading from {DEVICE_PATH} at offset {i}, returned the sequence {text}.")


if __name__ == "__main__":
    # Usage: python tools/client.py [OFFSET]
    args = [a for a in sys.argv[1:] if a]
    offset = int(args[0]) if args else MAX_INDEX
    if not 0 <= offset <= MAX_INDEX:
        raise SystemExit(f"OFFSET must be within 0..{MAX_INDEX}")
    run_client(offset)
