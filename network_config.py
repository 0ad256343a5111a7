from dataclasses import dataclass, field

from constructs import Node

VPC_CIDR = "10.0.0.0/16"
DEFAULT_ZONE_COUNT = 1


@dataclass
class NetworkConfig:
    """Zones and address block the network stack is built from."""

    zone_count: int = DEFAULT_ZONE_COUNT
    zones: list[str] = field(default_factory=list)
    vpc_cidr: str = VPC_CIDR

    @classmethod
    def from_context(cls, node: Node) -> "NetworkConfig":
        zones = node.try_get_context("availability_zones") or []
        if isinstance(zones, str):
            zones = [zone.strip() for zone in zones.split(",") if zone.strip()]

        zone_count = node.try_get_context("availability_zone_count")
        if zone_count is None:
            zone_count = len(zones) if zones else DEFAULT_ZONE_COUNT

        return cls(zone_count=int(zone_count), zones=list(zones))

    def select_zones(self, available: list[str]) -> list[str]:
        """
        Pick the zones to build subnets in.

        Raises:
            ValueError: if more zones are requested than the region offers,
                or the zone count is negative.
        """
        requested = len(self.zones) if self.zones else self.zone_count
        if requested < 0:
            raise ValueError(f"Availability zone count must not be negative, got {requested}")
        if requested > len(available):
            raise ValueError(f"Maximum allowed number of availability zones is {len(available)}")

        if self.zones:
            return list(self.zones)
        return list(available[:requested])
