"""Registry of the protocol adapters the engine can read markets from."""

import logging
from typing import Callable, Dict

from conversion_engine.protocols.base import ProtocolAdapter, ProtocolType

logger = logging.getLogger(__name__)


class ProtocolAdapterRegistry:
    """
    Maps each supported platform to the adapter normalizing its reads.

    Adapters are stateless, so one instance per platform is created on
    first use and shared afterwards.
    """

    _factories: Dict[ProtocolType, Callable[[], ProtocolAdapter]] = {}
    _adapters: Dict[ProtocolType, ProtocolAdapter] = {}

    @classmethod
    def register(
        cls,
        protocol_type: ProtocolType,
        factory: Callable[[], ProtocolAdapter],
    ) -> None:
        """
        Register the adapter factory of a platform.

        Re-registering a platform replaces its factory and drops the
        adapter created by the previous one.
        """
        cls._factories[protocol_type] = factory
        cls._adapters.pop(protocol_type, None)
        logger.debug(f"Registered adapter for {protocol_type.value}")

    @classmethod
    def get_adapter(cls, protocol_type: ProtocolType) -> ProtocolAdapter:
        """
        Adapter of a platform, created on first use.

        Raises:
            ValueError: If the platform has no registered adapter
        """
        adapter = cls._adapters.get(protocol_type)
        if adapter is not None:
            return adapter

        factory = cls._factories.get(protocol_type)
        if factory is None:
            registered = sorted(p.value for p in cls._factories)
            raise ValueError(
                f"No adapter registered for {protocol_type.value}, registered: {registered}"
            )

        adapter = cls._adapters[protocol_type] = factory()
        logger.debug(f"Created {adapter.protocol_name} adapter")
        return adapter

    @classmethod
    def clear(cls) -> None:
        """Forget all registrations."""
        cls._factories.clear()
        cls._adapters.clear()


def register_default_adapters() -> None:
    """Register the adapters of all supported platforms."""
    # Import here to avoid circular imports
    from conversion_engine.protocols.aave3.adapter import Aave3Adapter
    from conversion_engine.protocols.compound.adapter import CompoundForkAdapter
    from conversion_engine.protocols.compound.config import COMPOUND_FORKS

    for protocol_type in COMPOUND_FORKS:
        ProtocolAdapterRegistry.register(
            protocol_type,
            lambda protocol_type=protocol_type: CompoundForkAdapter(protocol_type),
        )
    ProtocolAdapterRegistry.register(ProtocolType.AAVE3, Aave3Adapter)
    logger.info("Registered default protocol adapters")
