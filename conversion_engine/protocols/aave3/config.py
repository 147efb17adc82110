"""Aave3 platform configuration and constants."""

# ltv, liquidationThreshold and reserveFactor are stored in basis points
PERCENTAGE_DECIMALS = 4

# Aave oracle prices are in the base currency (USD, 8 decimals)
BASE_CURRENCY_DECIMALS = 8

PROTOCOL_NAME = "Aave3"
