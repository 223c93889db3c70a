import ipaddress
from itertools import islice


def carve_subnet_cidrs(vpc_cidr: str, prefix_length: int, count: int) -> list[str]:
    """Return the first ``count`` fixed-size subnets of ``vpc_cidr``, in address order.

    Examples:
        - carve_subnet_cidrs("10.0.0.0/16", 24, 2) -> ["10.0.0.0/24", "10.0.1.0/24"]
    """
    network = ipaddress.ip_network(vpc_cidr)
    if prefix_length <= network.prefixlen or prefix_length > network.max_prefixlen:
        raise ValueError(
            f"Subnet prefix /{prefix_length} must be longer than the VPC block {network}"
        )
    if count < 1:
        raise ValueError(f"Subnet count must be positive, got {count}")

    capacity = 2 ** (prefix_length - network.prefixlen)
    if count > capacity:
        raise ValueError(
            f"VPC block {network} holds {capacity} /{prefix_length} subnets, {count} requested"
        )
    return [str(subnet) for subnet in islice(network.subnets(new_prefix=prefix_length), count)]
