"""Adapter for Aave3 reserves.

Raw reserve data follows the pool data provider: underlyingAsset,
decimals, availableLiquidity, totalVariableDebt, totalStableDebt,
accruedToTreasury, ltv and liquidationThreshold and reserveFactor in
basis points, borrowCap in whole tokens, isActive, isFrozen, isPaused,
borrowingEnabled, price in the base currency and the default reserve
interest rate strategy parameters in RAY.
"""

import logging
from typing import Optional

from conversion_engine.core.constants import PRICE_DECIMALS
from conversion_engine.core.fixed_point import scale_decimals
from conversion_engine.core.models import Asset, MarketSnapshot
from conversion_engine.protocols.aave3.config import (
    BASE_CURRENCY_DECIMALS,
    PERCENTAGE_DECIMALS,
    PROTOCOL_NAME,
)
from conversion_engine.protocols.base import ProtocolAdapter, ProtocolType, RawMarket
from conversion_engine.rates.aave_strategy import DefaultReserveRateStrategy

logger = logging.getLogger(__name__)


def _percentage_to_wad(value) -> int:
    return scale_decimals(int(value), PERCENTAGE_DECIMALS, 18)


class Aave3Adapter(ProtocolAdapter):
    """Market adapter for Aave3.

    A paused reserve rejects both supply and borrow. Inactive reserves
    are left out of the market set.
    """

    @property
    def protocol_type(self) -> ProtocolType:
        return ProtocolType.AAVE3

    @property
    def protocol_name(self) -> str:
        return PROTOCOL_NAME

    def snapshot(self, raw: RawMarket) -> Optional[MarketSnapshot]:
        address = self.require(raw, "underlyingAsset")
        if not raw.get("isActive", True):
            logger.debug(f"{self.protocol_name}: reserve {address} is not active")
            return None

        decimals = int(self.require(raw, "decimals"))
        paused = bool(raw.get("isPaused", False))

        return MarketSnapshot(
            asset=Asset(address=address, decimals=decimals, symbol=raw.get("symbol", "")),
            cash=int(self.require(raw, "availableLiquidity")),
            total_borrows=int(raw.get("totalVariableDebt", 0)) + int(raw.get("totalStableDebt", 0)),
            total_reserves=int(raw.get("accruedToTreasury", 0)),
            collateral_factor=_percentage_to_wad(self.require(raw, "ltv")),
            liquidation_threshold=_percentage_to_wad(self.require(raw, "liquidationThreshold")),
            price=scale_decimals(
                int(self.require(raw, "price")),
                int(raw.get("priceDecimals", BASE_CURRENCY_DECIMALS)),
                PRICE_DECIMALS,
            ),
            borrow_cap=int(raw.get("borrowCap", 0)) * 10**decimals,
            reserve_factor=_percentage_to_wad(raw.get("reserveFactor", 0)),
            mint_paused=paused,
            borrow_paused=paused,
            frozen=bool(raw.get("isFrozen", False)),
            borrowing_enabled=bool(raw.get("borrowingEnabled", True)),
            interest_rate_model_ref=raw.get("interestRateStrategyAddress")
            or f"aave3:{address.lower()}",
        )

    def interest_rate_model(self, raw: RawMarket) -> DefaultReserveRateStrategy:
        return DefaultReserveRateStrategy(
            optimal_usage_ratio=int(self.require(raw, "optimalUsageRatio")),
            base_variable_borrow_rate=int(raw.get("baseVariableBorrowRate", 0)),
            variable_rate_slope1=int(self.require(raw, "variableRateSlope1")),
            variable_rate_slope2=int(self.require(raw, "variableRateSlope2")),
        )
