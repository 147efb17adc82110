"""Constants for conversion plan and health factor calculations."""

# Precision constants
WAD = 10**18  # 18 decimal precision (collateral factors, health factors, rates)
RAY = 10**27  # 27 decimal precision (Aave rate parameters)

# Common quote unit of prices: 1.00 USD per whole token == 10**36
PRICE_DECIMALS = 36
PRICE_UNIT = 10**PRICE_DECIMALS

# Plan figures in borrow asset are scaled to 36 decimals
RESULT_DECIMALS = 36

MAX_UINT256 = 2**256 - 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Time constants
SECONDS_PER_YEAR = 365 * 24 * 3600  # Aave uses a 365-day year
