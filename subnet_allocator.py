import ipaddress
from dataclasses import dataclass
from enum import Enum


class SubnetTier(Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"
    ISOLATED = "Isolated"

    @property
    def label(self) -> str:
        return self.value

    @property
    def map_public_ip_on_launch(self) -> bool:
        return self is SubnetTier.PUBLIC


# Declared order within a zone
TIER_ORDER = (SubnetTier.PUBLIC, SubnetTier.PRIVATE, SubnetTier.ISOLATED)


class SubnetAllocator:
    """Hands out consecutive blocks from a network, shared across zones and tiers."""

    def __init__(self, network_cidr: str = "10.0.0.0/16", prefix_length: int = 24) -> None:
        self.network = ipaddress.ip_network(network_cidr)
        self._blocks = self.network.subnets(new_prefix=prefix_length)
        self._allocated: list[str] = []

    @property
    def allocated(self) -> list[str]:
        return list(self._allocated)

    def next_block(self) -> str:
        try:
            block = next(self._blocks)
        except StopIteration:
            raise ValueError(
                f"No free subnet blocks left in {self.network} "
                f"({len(self._allocated)} allocated)"
            ) from None
        self._allocated.append(str(block))
        return str(block)


@dataclass(frozen=True)
class SubnetPlan:
    tier: SubnetTier
    zone: str
    index: int
    cidr_block: str

    @property
    def name(self) -> str:
        return f"{self.tier.label}-{self.index}"

    @property
    def construct_id(self) -> str:
        return f"{self.tier.label}Subnet{self.index}"


def plan_subnets(zones: list[str], allocator: SubnetAllocator) -> list[SubnetPlan]:
    """
    Plan public, private and isolated subnets for each zone, in zone order.

    Blocks are taken from the allocator in creation order, so the first zone
    gets 10.0.0.0/24 - 10.0.2.0/24, the second 10.0.3.0/24 - 10.0.5.0/24, etc.
    """
    plans = []
    for index, zone in enumerate(zones):
        for tier in TIER_ORDER:
            plans.append(SubnetPlan(tier, zone, index, allocator.next_block()))
    return plans
