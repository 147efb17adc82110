"""Entry kinds: converting an input amount into collateral and borrow amounts."""

import logging
from dataclasses import dataclass

from conversion_engine.core.constants import ZERO_ADDRESS
from conversion_engine.core.exceptions import InvalidRequest
from conversion_engine.core.fixed_point import mul_div, mul_div_up
from conversion_engine.core.models import ConversionRequest, EntryKind, EntryParams, MarketSnapshot
from conversion_engine.engine.capacity import CapacityLimits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAmounts:
    """Collateral to supply and amount to borrow (asset units)."""

    collateral_amount: int
    amount_to_borrow: int


class EntryKindResolver:
    """
    Resolver for the three entry kinds.

    HF = (collateral * price_collateral * LT) / (borrow * price_borrow)

    so for a target health factor:
    borrow = collateral * price_collateral * LT / (HF * price_borrow)
    collateral = borrow * HF * price_borrow / (LT * price_collateral)

    both adjusted for the decimals of the two assets.
    """

    @staticmethod
    def liquidation_threshold(
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> int:
        """
        Liquidation threshold used to size a borrow.

        Taken from the borrow market's reported value, the way the
        platform adapters report it for a pair.
        """
        return borrow_market.liquidation_threshold

    @staticmethod
    def borrow_for_collateral(
        collateral_amount: int,
        health_factor: int,
        liquidation_threshold: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> int:
        """
        Calculate the maximum borrow keeping the target health factor.

        Args:
            collateral_amount: Collateral in collateral asset units
            health_factor: Target health factor (18 decimals)
            liquidation_threshold: Liquidation threshold (18 decimals)
            collateral_market: Collateral market snapshot (price, decimals)
            borrow_market: Borrow market snapshot (price, decimals)

        Returns:
            Amount to borrow in borrow asset units (rounded down)
        """
        return mul_div(
            collateral_amount * collateral_market.price * liquidation_threshold,
            10**borrow_market.decimals,
            health_factor * borrow_market.price * 10**collateral_market.decimals,
        )

    @staticmethod
    def collateral_for_borrow(
        amount_to_borrow: int,
        health_factor: int,
        liquidation_threshold: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> int:
        """
        Calculate the minimum collateral keeping the target health factor.

        Rounded up so the resulting health factor is never below target.

        Returns:
            Collateral amount in collateral asset units
        """
        return mul_div_up(
            amount_to_borrow * health_factor * borrow_market.price,
            10**collateral_market.decimals,
            liquidation_threshold * collateral_market.price * 10**borrow_market.decimals,
        )

    @staticmethod
    def proportional_collateral(
        amount_in: int,
        health_factor: int,
        liquidation_threshold: int,
        x: int,
        y: int,
    ) -> int:
        """
        Split amount_in so retained value : borrowed value == x : y.

        With a = LT * x / (HF * y):
        collateral = amount_in / (1 + a) = amount_in * HF * y / (HF * y + LT * x)

        Returns:
            Collateral amount in collateral asset units
        """
        if x <= 0 or y <= 0:
            raise InvalidRequest(f"Proportions must be positive, got {x}:{y}")
        return mul_div(
            amount_in,
            health_factor * y,
            health_factor * y + liquidation_threshold * x,
        )

    @staticmethod
    def validate_request(request: ConversionRequest, min_health_factor: int) -> None:
        """
        Reject malformed requests.

        Raises:
            InvalidRequest: On a zero asset, zero amount, zero period count,
                a target health factor below the minimum or bad proportions
        """
        if not request.collateral_asset or request.collateral_asset.lower() == ZERO_ADDRESS:
            raise InvalidRequest("Collateral asset is zero")
        if not request.borrow_asset or request.borrow_asset.lower() == ZERO_ADDRESS:
            raise InvalidRequest("Borrow asset is zero")
        if request.amount_in <= 0:
            raise InvalidRequest(f"Amount in must be positive, got {request.amount_in}")
        if request.periods <= 0:
            raise InvalidRequest(f"Count of periods must be positive, got {request.periods}")
        if request.health_factor_target < min_health_factor:
            raise InvalidRequest(
                f"Health factor target {request.health_factor_target} is below "
                f"minimum {min_health_factor}"
            )
        if request.entry.kind == EntryKind.EXACT_PROPORTIONS and (
            request.entry.x <= 0 or request.entry.y <= 0
        ):
            raise InvalidRequest(
                f"Proportions must be positive, got {request.entry.x}:{request.entry.y}"
            )

    @classmethod
    def resolve(
        cls,
        entry: EntryParams,
        amount_in: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
        health_factor_target: int,
        limits: CapacityLimits,
    ) -> ResolvedAmounts:
        """
        Convert an input amount into (collateral_amount, amount_to_borrow).

        Args:
            entry: Entry kind and its parameters
            amount_in: Borrow asset units for EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN,
                collateral asset units otherwise
            collateral_market: Collateral market snapshot
            borrow_market: Borrow market snapshot
            health_factor_target: Target health factor (18 decimals)
            limits: Capacity limits of the borrow market

        Returns:
            ResolvedAmounts clamped to the capacity limits
        """
        lt = cls.liquidation_threshold(collateral_market, borrow_market)

        if entry.kind == EntryKind.EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN:
            amount_to_borrow = min(amount_in, limits.max_amount_to_borrow)
            collateral_amount = cls.collateral_for_borrow(
                amount_to_borrow, health_factor_target, lt, collateral_market, borrow_market
            )
            collateral_amount = min(collateral_amount, limits.max_amount_to_supply)

        else:
            if entry.kind == EntryKind.EXACT_PROPORTIONS:
                collateral_amount = cls.proportional_collateral(
                    amount_in, health_factor_target, lt, entry.x, entry.y
                )
            elif entry.kind == EntryKind.EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT:
                collateral_amount = amount_in
            else:
                raise InvalidRequest(f"Unknown entry kind: {entry.kind}")

            collateral_amount = min(collateral_amount, limits.max_amount_to_supply)
            amount_to_borrow = cls.borrow_for_collateral(
                collateral_amount, health_factor_target, lt, collateral_market, borrow_market
            )
            amount_to_borrow = min(amount_to_borrow, limits.max_amount_to_borrow)

        logger.debug(
            f"Entry kind {entry.kind.name}: amount_in={amount_in}, "
            f"collateral={collateral_amount}, borrow={amount_to_borrow}"
        )
        return ResolvedAmounts(
            collateral_amount=collateral_amount,
            amount_to_borrow=amount_to_borrow,
        )
