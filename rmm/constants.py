"""Protocol constants for the replicating market maker core.

Centralizes unit bases and numeric bounds shared by the math and AMM layers.
"""

# 64.64 fixed-point unit (one real unit = 2^64 in the underlying integer)
ONE_X64 = 1 << 64

# Signed 128-bit range of the underlying fixed-point integer
INT128_MIN = -(1 << 127)
INT128_MAX = (1 << 127) - 1

# 18-decimal basis used to normalize raw token amounts
WAD = 10**18

# Basis points per whole (10_000 bps == 100%)
PERCENTAGE = 10_000

# Seconds per year used for time-to-maturity conversion (365.2425 days)
YEAR = 31_556_952

# Largest decimals a token may use and still map onto the wad basis
MAX_TOKEN_DECIMALS = 18
