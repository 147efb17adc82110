"""Adapter for Compound-fork platforms (Keom, Zerovix, Moonwell).

Raw market data mirrors the cToken and comptroller reads:
underlying, decimals, cash, totalBorrows, totalReserves,
reserveFactorMantissa, collateralFactorMantissa, borrowCap,
underlyingPrice, mintGuardianPaused, borrowGuardianPaused, isListed,
interestRateModel and the jump rate model parameters.
"""

import logging
from typing import Optional

from conversion_engine.core.constants import PRICE_DECIMALS
from conversion_engine.core.fixed_point import scale_decimals
from conversion_engine.core.models import Asset, MarketSnapshot
from conversion_engine.protocols.base import ProtocolAdapter, ProtocolType, RawMarket
from conversion_engine.protocols.compound.config import (
    COMPOUND_FORKS,
    ORACLE_PRICE_DECIMALS,
    PROTOCOL_NAMES,
)
from conversion_engine.rates.jump_rate import JumpRateModel

logger = logging.getLogger(__name__)


class CompoundForkAdapter(ProtocolAdapter):
    """Market adapter shared by the Compound forks.

    Compound has a single collateral factor per market, it doubles as
    the liquidation threshold.
    """

    def __init__(self, protocol_type: ProtocolType = ProtocolType.KEOM):
        if protocol_type not in COMPOUND_FORKS:
            raise ValueError(f"{protocol_type.value} is not a Compound fork")
        self._protocol_type = protocol_type

    @property
    def protocol_type(self) -> ProtocolType:
        return self._protocol_type

    @property
    def protocol_name(self) -> str:
        return PROTOCOL_NAMES[self._protocol_type]

    @staticmethod
    def parse_price(oracle_price: int, decimals: int) -> int:
        """Convert an oracle price (36 - decimals) into 36 decimals per whole token."""
        return scale_decimals(
            int(oracle_price),
            ORACLE_PRICE_DECIMALS - decimals,
            PRICE_DECIMALS,
        )

    def snapshot(self, raw: RawMarket) -> Optional[MarketSnapshot]:
        address = self.require(raw, "underlying")
        if not raw.get("isListed", True):
            logger.debug(f"{self.protocol_name}: market {address} is not listed")
            return None

        decimals = int(self.require(raw, "decimals"))
        collateral_factor = int(self.require(raw, "collateralFactorMantissa"))

        return MarketSnapshot(
            asset=Asset(address=address, decimals=decimals, symbol=raw.get("symbol", "")),
            cash=int(self.require(raw, "cash")),
            total_borrows=int(self.require(raw, "totalBorrows")),
            total_reserves=int(raw.get("totalReserves", 0)),
            collateral_factor=collateral_factor,
            liquidation_threshold=collateral_factor,
            price=self.parse_price(self.require(raw, "underlyingPrice"), decimals),
            borrow_cap=int(raw.get("borrowCap", 0)),
            reserve_factor=int(raw.get("reserveFactorMantissa", 0)),
            mint_paused=bool(raw.get("mintGuardianPaused", False)),
            borrow_paused=bool(raw.get("borrowGuardianPaused", False)),
            interest_rate_model_ref=raw.get("interestRateModel")
            or f"{self._protocol_type.value}:{address.lower()}",
        )

    def interest_rate_model(self, raw: RawMarket) -> JumpRateModel:
        return JumpRateModel(
            base_rate_per_period=int(self.require(raw, "baseRatePerTimestamp")),
            multiplier_per_period=int(self.require(raw, "multiplierPerTimestamp")),
            jump_multiplier_per_period=int(self.require(raw, "jumpMultiplierPerTimestamp")),
            kink=int(self.require(raw, "kink")),
            name=raw.get("irmName") or f"{self.protocol_name} JumpRateModel",
        )
