"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from config.settings import DEFAULT_PERIODS_PER_YEAR, EngineSettings
from conversion_engine.core.constants import PRICE_UNIT
from conversion_engine.core.fixed_point import wad
from conversion_engine.core.models import Asset, MarketSet, MarketSnapshot
from conversion_engine.rates import JumpRateModel

COLLATERAL = "0x000000000000000000000000000000000000c011"
BORROW = "0x000000000000000000000000000000000000b044"
USDC = "0x2791bca1f2de4661ed88a30c99a7a9449aa84174"
WBTC = "0x1bfd67037b42cf73acf2047067bd4f2c47d9bfd6"

IRM_REF = "jump-rate"


@pytest.fixture
def settings() -> EngineSettings:
    """Settings with explicit values, independent of the environment."""
    return EngineSettings(
        min_health_factor="1.05",
        target_health_factor="2.0",
        too_healthy_health_factor="4.0",
        max_allowed_health_factor_reduction="0.005",
        periods_per_year=DEFAULT_PERIODS_PER_YEAR,
        log_level="INFO",
    )


@pytest.fixture
def rate_model() -> JumpRateModel:
    """Jump rate model with per-second parameters."""
    return JumpRateModel(
        base_rate_per_period=2 * 10**9,
        multiplier_per_period=5 * 10**10,
        jump_multiplier_per_period=10**12,
        kink=wad("0.8"),
        name=IRM_REF,
    )


@pytest.fixture
def market_factory() -> Callable[..., MarketSnapshot]:
    """Factory creating market snapshots with sensible defaults."""

    def create_market(
        address: str = COLLATERAL,
        decimals: int = 18,
        symbol: str = "",
        cash: int = 10**6 * 10**18,
        total_borrows: int = 5 * 10**5 * 10**18,
        total_reserves: int = 0,
        collateral_factor: int = wad("0.85"),
        liquidation_threshold: int = wad("0.85"),
        price: int = PRICE_UNIT,
        **kwargs,
    ) -> MarketSnapshot:
        return MarketSnapshot(
            asset=Asset(address=address, decimals=decimals, symbol=symbol),
            cash=cash,
            total_borrows=total_borrows,
            total_reserves=total_reserves,
            collateral_factor=collateral_factor,
            liquidation_threshold=liquidation_threshold,
            price=price,
            interest_rate_model_ref=kwargs.pop("interest_rate_model_ref", IRM_REF),
            **kwargs,
        )

    return create_market


@pytest.fixture
def collateral_market(market_factory) -> MarketSnapshot:
    """18-decimal collateral priced at 1.00."""
    return market_factory(address=COLLATERAL, symbol="COLL", reserve_factor=wad("0.1"))


@pytest.fixture
def borrow_market(market_factory) -> MarketSnapshot:
    """18-decimal borrow asset priced at 1.00."""
    return market_factory(address=BORROW, symbol="BORR", reserve_factor=wad("0.1"))


@pytest.fixture
def usdc_market(market_factory) -> MarketSnapshot:
    """6-decimal stablecoin priced at 1.00."""
    return market_factory(
        address=USDC,
        decimals=6,
        symbol="USDC",
        cash=10**6 * 10**6,
        total_borrows=4 * 10**5 * 10**6,
        collateral_factor=wad("0.8"),
        liquidation_threshold=wad("0.8"),
        reserve_factor=wad("0.1"),
    )


@pytest.fixture
def wbtc_market(market_factory) -> MarketSnapshot:
    """8-decimal asset priced at 30000.00."""
    return market_factory(
        address=WBTC,
        decimals=8,
        symbol="WBTC",
        cash=100 * 10**8,
        total_borrows=20 * 10**8,
        collateral_factor=wad("0.7"),
        liquidation_threshold=wad("0.7"),
        price=30_000 * PRICE_UNIT,
        reserve_factor=wad("0.2"),
    )


@pytest.fixture
def market_set(collateral_market, borrow_market, usdc_market, wbtc_market, rate_model) -> MarketSet:
    """Market set with all test markets sharing one rate model."""
    return MarketSet.from_markets(
        [collateral_market, borrow_market, usdc_market, wbtc_market],
        {IRM_REF: rate_model},
    )


@pytest.fixture
def set_with(rate_model) -> Callable[..., MarketSet]:
    """Build a market set from the given snapshots."""

    def build(*markets: MarketSnapshot) -> MarketSet:
        return MarketSet.from_markets(markets, {IRM_REF: rate_model})

    return build
