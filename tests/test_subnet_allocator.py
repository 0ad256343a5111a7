import ipaddress

import pytest

from subnet_allocator import SubnetAllocator, SubnetTier, plan_subnets


def test_blocks_are_handed_out_in_order():
    allocator = SubnetAllocator()

    assert allocator.next_block() == "10.0.0.0/24"
    assert allocator.next_block() == "10.0.1.0/24"
    assert allocator.next_block() == "10.0.2.0/24"
    assert allocator.allocated == ["10.0.0.0/24", "10.0.1.0/24", "10.0.2.0/24"]


def test_allocators_do_not_share_state():
    first = SubnetAllocator()
    first.next_block()
    first.next_block()

    assert SubnetAllocator().next_block() == "10.0.0.0/24"


def test_exhausted_network_raises():
    allocator = SubnetAllocator("10.0.0.0/23")
    allocator.next_block()
    allocator.next_block()

    with pytest.raises(ValueError, match="No free subnet blocks left in 10.0.0.0/23"):
        allocator.next_block()


def test_tier_flags():
    assert SubnetTier.PUBLIC.map_public_ip_on_launch is True
    assert SubnetTier.PRIVATE.map_public_ip_on_launch is False
    assert SubnetTier.ISOLATED.map_public_ip_on_launch is False


def test_plan_two_zones():
    plans = plan_subnets(["zone-a", "zone-b"], SubnetAllocator())

    assert [(p.name, p.zone, p.cidr_block) for p in plans] == [
        ("Public-0", "zone-a", "10.0.0.0/24"),
        ("Private-0", "zone-a", "10.0.1.0/24"),
        ("Isolated-0", "zone-a", "10.0.2.0/24"),
        ("Public-1", "zone-b", "10.0.3.0/24"),
        ("Private-1", "zone-b", "10.0.4.0/24"),
        ("Isolated-1", "zone-b", "10.0.5.0/24"),
    ]
    assert plans[4].construct_id == "PrivateSubnet1"


def test_planned_blocks_are_unique_and_inside_network():
    network = ipaddress.ip_network("10.0.0.0/16")
    plans = plan_subnets([f"zone-{n}" for n in range(6)], SubnetAllocator())
    blocks = [ipaddress.ip_network(p.cidr_block) for p in plans]

    assert len(plans) == 18
    assert len(set(blocks)) == len(blocks)
    assert all(block.subnet_of(network) for block in blocks)


def test_plan_no_zones():
    allocator = SubnetAllocator()

    assert plan_subnets([], allocator) == []
    assert allocator.allocated == []
