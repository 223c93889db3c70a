import pytest

from common.cidr import carve_subnet_cidrs


def test_carves_consecutive_blocks_in_address_order():
    assert carve_subnet_cidrs("10.0.0.0/16", 24, 4) == [
        "10.0.0.0/24",
        "10.0.1.0/24",
        "10.0.2.0/24",
        "10.0.3.0/24",
    ]


def test_carves_until_block_is_full():
    assert carve_subnet_cidrs("192.168.0.0/23", 24, 2) == [
        "192.168.0.0/24",
        "192.168.1.0/24",
    ]


@pytest.mark.parametrize(
    "vpc_cidr,prefix_length,count",
    [
        ("10.0.0.0/23", 24, 4),  # block too small
        ("10.0.0.0/24", 24, 1),  # prefix not longer than block
        ("10.0.0.0/16", 33, 1),  # prefix beyond address length
        ("10.0.0.0/16", 24, 0),  # nothing to carve
        ("10.0.0.1/16", 24, 1),  # host bits set
        ("not-a-cidr", 24, 1),
    ],
)
def test_rejects_unusable_plans(vpc_cidr: str, prefix_length: int, count: int):
    with pytest.raises(ValueError):
        carve_subnet_cidrs(vpc_cidr, prefix_length, count)
