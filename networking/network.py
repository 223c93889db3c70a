from aws_cdk import Stack, aws_ec2 as ec2
from constructs import Construct

from common import constants
from common.cidr import carve_subnet_cidrs
from common.stack_context import StackContext


class Network(Construct):
    """VPC with public and private subnets across two availability zones.

    Subnets are carved as consecutive /24 blocks: public subnets first, then
    private ones. Private subnets have no NAT and no default route.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        context: StackContext,
        vpc_cidr: str = constants.VPC_CIDR,
        enable_vpc_endpoints: bool = False,
    ) -> None:
        super().__init__(scope, construct_id)
        self.context = context

        availability_zones = Stack.of(self).availability_zones
        if len(availability_zones) < constants.AZ_COUNT:
            raise ValueError(
                f"Region exposes {len(availability_zones)} availability zones, "
                f"{constants.AZ_COUNT} required"
            )
        self.address_plan = carve_subnet_cidrs(
            vpc_cidr, constants.CIDR_MASK, 2 * constants.AZ_COUNT
        )

        self.vpc = self.create_vpc(vpc_cidr)
        self.security_group = self.create_web_sg(self.vpc)
        if enable_vpc_endpoints:
            self.vpc_endpoint()

    def create_vpc(self, vpc_cidr: str) -> ec2.Vpc:
        return ec2.Vpc(
            self,
            self.context.build_resource_id("Vpc"),
            vpc_name=self.context.build_resource_name("vpc"),
            ip_addresses=ec2.IpAddresses.cidr(vpc_cidr),
            max_azs=constants.AZ_COUNT,
            nat_gateways=0,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            restrict_default_security_group=False,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name=constants.PUBLIC_SUBNET_NAME,
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=constants.CIDR_MASK,
                    map_public_ip_on_launch=True,
                ),
                ec2.SubnetConfiguration(
                    name=constants.PRIVATE_SUBNET_NAME,
                    subnet_type=ec2.SubnetType.PRIVATE_ISOLATED,
                    cidr_mask=constants.CIDR_MASK,
                ),
            ],
        )

    def create_web_sg(self, vpc: ec2.IVpc) -> ec2.SecurityGroup:
        web_sg = ec2.SecurityGroup(
            self,
            id=self.context.build_resource_id("SG"),
            vpc=vpc,
            allow_all_outbound=True,
            description="Security group for the load balancer and web service tasks",
        )
        web_sg.add_ingress_rule(
            peer=ec2.Peer.ipv4(constants.ANY_IPV4_CIDR),
            connection=ec2.Port.tcp(constants.HTTP_PORT),
            description=f"Allow inbound HTTP (TCP/{constants.HTTP_PORT}) from anywhere",
        )
        return web_sg

    def remove_peer_ingress_rules(self) -> None:
        """Drop the group-to-itself rules CDK adds when the ALB and the tasks share this group."""
        for child in list(self.security_group.node.children):
            if isinstance(child, ec2.CfnSecurityGroupIngress):
                self.security_group.node.try_remove_child(child.node.id)

    def vpc_endpoint(self) -> None:
        """Add the endpoints Fargate tasks in private subnets need to pull images and ship logs."""
        private = ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED)

        # Gateway VPC endpoint for S3 (ECR image layers are served from S3)
        self.vpc.add_gateway_endpoint(
            "S3Endpoint",
            service=ec2.GatewayVpcEndpointAwsService.S3,
            subnets=[private],
        )

        interface_services = {
            "CloudWatchLogsEndpoint": ec2.InterfaceVpcEndpointAwsService.CLOUDWATCH_LOGS,
            "EcrApiEndpoint": ec2.InterfaceVpcEndpointAwsService.ECR,
            "EcrDockerEndpoint": ec2.InterfaceVpcEndpointAwsService.ECR_DOCKER,
        }
        for endpoint_id, service in interface_services.items():
            self.vpc.add_interface_endpoint(endpoint_id, service=service, subnets=private)
