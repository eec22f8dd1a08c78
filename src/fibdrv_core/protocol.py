"""fibdrv device constants.

Single source of truth for word width, index domain and result buffer layout.
Keep this file stable. The device, the sweep client and the verifier must agree.
"""

DEVICE_NAME = "fibonacci"
DEVICE_PATH = "/dev/" + DEVICE_NAME

# Fixed machine word emulated by the adder
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

# Largest index whose value still fits the signed read status
MAX_INDEX = 92

# Shared result buffer: up to 20 digits for a 64-bit word plus zero fill
RESULT_BUF_LEN = 30

# Substituted into the result buffer when the digits do not fit
DIAG_MESSAGE = b"not enough buffer size"

# Trivial status reported by write()
WRITE_STATUS = 1

# Seek origins (same numbering as os.SEEK_SET / SEEK_CUR / SEEK_END)
SEEK_SET = 0
SEEK_CUR = 1
SEEK_END = 2
