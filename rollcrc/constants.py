# Reflected CRC-32 (IEEE 802.3) polynomial
CRC32_POLY = 0xEDB88320

# Initial values
INIT_ZERO = 0
INIT_ONES = 0xFFFFFFFF  # zip/rar/7-zip quasi-CRC

MASK32 = 0xFFFFFFFF
TABLE_SIZE = 256

# Index of the highest single-bit byte; the doubling builder seeds from it
SEED_INDEX = 128

# Rolling window
DEFAULT_WINDOW_SIZE = 100

# Self-test demo: trailing bytes rolled through after the first window
DEFAULT_TEST_EXTRA = 200

PRESET_ROLLING = "rolling"
PRESET_ZIP = "zip"
