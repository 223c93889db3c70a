from aws_cdk import (
    CfnOutput,
    Stack,
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_elasticloadbalancingv2 as elbv2,
    aws_iam as iam,
    aws_logs as logs,
)
from constructs import Construct

import common.constants as constants
from common.stack_context import StackContext
from networking.network import Network


class WebServiceStack(Stack):
    """Load-balanced Fargate service running an externally built container image."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        image_url: str,
        environment: str = constants.DEFAULT_ENV,
        vpc_cidr: str = constants.VPC_CIDR,
        enable_vpc_endpoints: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.context = StackContext(scope=self, env=environment)

        # Network: VPC, gateway, subnets, routes and the shared security group
        self.network = Network(
            self,
            "Network",
            context=self.context,
            vpc_cidr=vpc_cidr,
            enable_vpc_endpoints=enable_vpc_endpoints,
        )

        # Identity
        self.execution_role = self._build_execution_role()

        # Observability
        self.log_group = self.context.build_log_group("service")

        # Load balancing
        self.alb = self._build_application_load_balancer(
            self.network.vpc, self.network.security_group
        )
        self.target_group = self._build_target_group(self.network.vpc)
        self.listener = self._build_http_listener(self.alb, self.target_group)

        # Compute
        self.cluster = self._build_cluster(self.network.vpc)
        self.task_definition = self._build_task_definition(
            image_url=image_url,
            execution_role=self.execution_role,
            log_group=self.log_group,
        )
        self.service = self._build_fargate_service(
            cluster=self.cluster,
            task_definition=self.task_definition,
            security_group=self.network.security_group,
        )
        self.service.attach_to_application_target_group(self.target_group)
        self.network.remove_peer_ingress_rules()
        self.service.node.add_dependency(self.listener)

        CfnOutput(
            self,
            "AlbDnsName",
            value=self.alb.load_balancer_dns_name,
            description="Public DNS name of the application load balancer",
        )

    # Resource creation

    def _build_execution_role(self) -> iam.Role:
        return iam.Role(
            self,
            self.context.build_resource_id("ExecutionRole"),
            role_name=self.context.build_resource_name("execution-role"),
            assumed_by=iam.ServicePrincipal(constants.ECS_TASKS_SERVICE_PRINCIPAL),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    constants.ECS_TASK_EXECUTION_POLICY
                )
            ],
            description="Lets ECS pull the container image and write task logs",
        )

    def _build_application_load_balancer(
        self, vpc: ec2.IVpc, security_group: ec2.ISecurityGroup
    ) -> elbv2.ApplicationLoadBalancer:
        return elbv2.ApplicationLoadBalancer(
            self,
            self.context.build_resource_id("Alb"),
            load_balancer_name=self.context.build_resource_name("alb"),
            vpc=vpc,
            internet_facing=True,
            security_group=security_group,
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC),
        )

    def _build_target_group(self, vpc: ec2.IVpc) -> elbv2.ApplicationTargetGroup:
        return elbv2.ApplicationTargetGroup(
            self,
            self.context.build_resource_id("TargetGroup"),
            target_group_name=self.context.build_resource_name("tg"),
            vpc=vpc,
            port=constants.HTTP_PORT,
            protocol=elbv2.ApplicationProtocol.HTTP,
            target_type=elbv2.TargetType.IP,
            health_check=elbv2.HealthCheck(
                path=constants.HEALTH_CHECK_PATH,
                protocol=elbv2.Protocol.HTTP,
            ),
        )

    def _build_http_listener(
        self,
        alb: elbv2.ApplicationLoadBalancer,
        target_group: elbv2.IApplicationTargetGroup,
    ) -> elbv2.ApplicationListener:
        # Ingress is owned by the shared security group
        return alb.add_listener(
            "HttpListener",
            port=constants.HTTP_PORT,
            protocol=elbv2.ApplicationProtocol.HTTP,
            open=False,
            default_action=elbv2.ListenerAction.forward([target_group]),
        )

    def _build_cluster(self, vpc: ec2.IVpc) -> ecs.Cluster:
        return ecs.Cluster(
            self,
            self.context.build_resource_id("Cluster"),
            cluster_name=self.context.build_resource_name("cluster"),
            vpc=vpc,
        )

    def _build_task_definition(
        self, image_url: str, execution_role: iam.IRole, log_group: logs.ILogGroup
    ) -> ecs.FargateTaskDefinition:
        task_definition = ecs.FargateTaskDefinition(
            self,
            self.context.build_resource_id("TaskDef"),
            family=self.context.build_resource_name("task"),
            cpu=constants.TASK_CPU,
            memory_limit_mib=constants.TASK_MEMORY_MIB,
            execution_role=execution_role,
        )
        task_definition.add_container(
            self.context.build_resource_id("Container"),
            container_name=constants.CONTAINER_NAME,
            image=ecs.ContainerImage.from_registry(image_url),
            essential=True,
            port_mappings=[
                ecs.PortMapping(
                    container_port=constants.CONTAINER_PORT,
                    protocol=ecs.Protocol.TCP,
                )
            ],
            logging=ecs.LogDrivers.aws_logs(
                stream_prefix=constants.LOG_STREAM_PREFIX,
                log_group=log_group,
            ),
        )
        return task_definition

    def _build_fargate_service(
        self,
        cluster: ecs.ICluster,
        task_definition: ecs.FargateTaskDefinition,
        security_group: ec2.ISecurityGroup,
    ) -> ecs.FargateService:
        return ecs.FargateService(
            self,
            self.context.build_resource_id("Service"),
            service_name=self.context.build_resource_name("service"),
            cluster=cluster,
            task_definition=task_definition,
            desired_count=constants.DESIRED_COUNT,
            assign_public_ip=False,
            security_groups=[security_group],
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED),
        )
