import ipaddress
from itertools import combinations

from stack_test_helpers import find_resources_by_type, get_single_resource_id


def subnet_ids_by_visibility(template, public: bool) -> set[str]:
    subnets = find_resources_by_type(template, "AWS::EC2::Subnet")
    return {
        logical_id
        for logical_id, subnet in subnets.items()
        if bool(subnet["Properties"].get("MapPublicIpOnLaunch")) is public
    }


def assert_subnets_within_vpc(template):
    vpcs = find_resources_by_type(template, "AWS::EC2::VPC")
    vpc_id = get_single_resource_id(vpcs, "AWS::EC2::VPC")
    vpc_block = ipaddress.ip_network(vpcs[vpc_id]["Properties"]["CidrBlock"])

    subnets = find_resources_by_type(template, "AWS::EC2::Subnet")
    blocks = [
        ipaddress.ip_network(subnet["Properties"]["CidrBlock"])
        for subnet in subnets.values()
    ]
    assert blocks, "topology declares no subnets"
    for block in blocks:
        assert block.subnet_of(vpc_block), f"subnet {block} is outside VPC {vpc_block}"
    for first, second in combinations(blocks, 2):
        assert not first.overlaps(second), f"subnets {first} and {second} overlap"


def assert_service_in_private_subnets(template):
    services = find_resources_by_type(template, "AWS::ECS::Service")
    service_id = get_single_resource_id(services, "AWS::ECS::Service")
    awsvpc = services[service_id]["Properties"]["NetworkConfiguration"][
        "AwsvpcConfiguration"
    ]
    service_subnets = {subnet["Ref"] for subnet in awsvpc["Subnets"]}

    private_subnets = subnet_ids_by_visibility(template, public=False)
    assert service_subnets, "service is not placed in any subnet"
    assert service_subnets <= private_subnets, (
        "ECS service must run in private subnets only, "
        f"got {sorted(service_subnets - private_subnets)}"
    )
    assert awsvpc["AssignPublicIp"] == "DISABLED"
