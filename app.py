#!/usr/bin/env python3
"""AWS CDK entrypoint for provisioning the v web service infrastructure.

This module wires up the remote-state backend and the load-balanced Fargate
service stacks. The container image is supplied by the invoking pipeline:

    cdk deploy -c image_url=<registry>/<repository>:<tag>

The target account and region come from the CDK CLI defaults; the state backend
is always placed in its own region.
"""
import aws_cdk as cdk
from aws_cdk import Environment

from common.deployment_config import DeploymentConfig
from common.logger import logger
from common.state_backend import RemoteStateBackend
from state_backend.state_backend_stack import StateBackendStack
from web_service.web_service_stack import WebServiceStack

app = cdk.App()

config = DeploymentConfig.from_app(app)
backend = RemoteStateBackend.from_app(app)

StateBackendStack(
    app,
    "StateBackendStack",
    backend=backend,
    env=Environment(account=config.account, region=backend.region),
)

WebServiceStack(
    app,
    "WebServiceStack",
    image_url=config.image_url,
    environment=config.environment,
    vpc_cidr=config.vpc_cidr,
    enable_vpc_endpoints=config.enable_vpc_endpoints,
    env=Environment(account=config.account, region=config.region),
)

cdk.Tags.of(app).add("project", "v-web")
cdk.Tags.of(app).add("environment", config.environment)

logger.info("Synthesizing stacks", extra={"state_uri": backend.state_uri})
app.synth()
