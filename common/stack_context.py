from attrs import define, field, validators
from aws_cdk import RemovalPolicy, Stack, aws_logs as logs

import common.constants as constants


@define(slots=True, frozen=True)
class StackContext:
    scope: Stack
    env: str = field(
        default=constants.DEFAULT_ENV,
        validator=validators.matches_re(r"^[a-z][a-z0-9]*$"),
        metadata={"description": "Deployment environment (dev, staging, prod)"},
    )
    service: str = field(default=constants.SERVICE_NAME, init=False)
    component: str = field(default=constants.COMPONENT)

    # ---------- naming ----------
    def build_resource_name(self, resource_type: str) -> str:
        """Build a physical resource name.

        Examples:
            - build_resource_name("alb") -> v-web-alb-dev
        """
        return f"{self.service}-{self.component}-{resource_type}-{self.env}".lower()

    def build_resource_id(self, resource_type: str) -> str:
        """Build a construct ID.

        Examples:
            - build_resource_id("Cluster") -> VWebCluster
        """
        return (
            f"{self.service.capitalize()}"
            f"{self.component.capitalize()}"
            f"{resource_type[:1].upper()}{resource_type[1:]}"
        )

    def build_log_group(self, resource_type: str) -> logs.LogGroup:
        return logs.LogGroup(
            self.scope,
            self.build_resource_id("LogGroup"),
            log_group_name=f"/ecs/{self.build_resource_name(resource_type)}",
            removal_policy=RemovalPolicy.DESTROY,
            retention=logs.RetentionDays.TWO_WEEKS,
        )
