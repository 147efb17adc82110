"""Selection of the cheapest conversion across lending platforms."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from conversion_engine.core.models import ConversionPlan, ConversionRequest
from conversion_engine.engine.apr import plan_apr18
from conversion_engine.engine.planner import ConversionPlanBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedPlan:
    """Conversion plan with its net cost relative to the collateral value."""

    plan: ConversionPlan
    apr18: int

    @property
    def converter(self) -> Optional[str]:
        return self.plan.converter

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {**self.plan.to_dict(), "apr18": str(self.apr18)}


class PlanSelector:
    """
    Ranks the plans offered by several platforms for one request.

    Platforms that cannot serve the request (null plan or nothing to
    borrow) are skipped. The rest are ordered by APR, cheapest first.
    """

    def __init__(
        self,
        builders: Sequence[ConversionPlanBuilder],
        periods_per_year: Optional[int] = None,
    ):
        self.builders = list(builders)
        self.periods_per_year = periods_per_year

    def rank(self, request: ConversionRequest) -> List[RankedPlan]:
        """
        Build a plan on every platform and rank them.

        Args:
            request: Conversion request, shared by all platforms

        Returns:
            Ranked plans, cheapest first (may be empty)

        Raises:
            InvalidRequest: If the request is malformed
        """
        ranked = []
        for builder in self.builders:
            plan = builder.build(request)
            if plan.is_null:
                logger.debug(f"Skipping {builder.converter}: no plan available")
                continue
            if plan.amount_to_borrow == 0:
                logger.debug(f"Skipping {builder.converter}: nothing can be borrowed")
                continue
            ranked.append(
                RankedPlan(
                    plan=plan,
                    apr18=plan_apr18(plan, request.periods, self.periods_per_year),
                )
            )

        # Stable sort keeps registration order between equal APRs
        ranked.sort(key=lambda r: r.apr18)
        logger.info(
            f"Ranked {len(ranked)} of {len(self.builders)} platforms for "
            f"{request.collateral_asset} -> {request.borrow_asset}"
        )
        return ranked

    def best(self, request: ConversionRequest) -> ConversionPlan:
        """Cheapest plan, or the null plan if no platform can serve the request."""
        ranked = self.rank(request)
        return ranked[0].plan if ranked else ConversionPlan.null()
