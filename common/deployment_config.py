"""Deployment inputs resolved from the CDK app context and the process environment.

``image_url`` is the only required input; it is normally supplied by the invoking
pipeline with ``cdk deploy -c image_url=<image>`` and falls back to ``IMAGE_URL``.
"""
import os
from typing import Any, Optional

from attrs import define, field, validators
from aws_cdk import App

import common.constants as constants
from common.cidr import carve_subnet_cidrs
from common.logger import logger

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no", ""})


def to_bool(value: Any) -> bool:
    """Coerce a CDK context value (``-c key=value`` always arrives as a string)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    normalized = str(value).strip().lower()
    if normalized in _TRUE_STRINGS:
        return True
    if normalized in _FALSE_STRINGS:
        return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean flag")


def _not_blank(instance, attribute, value: str) -> None:
    if not value.strip() or any(char.isspace() for char in value):
        raise ValueError(f"{attribute.name} must be a non-empty string without whitespace")


def _fits_address_plan(instance, attribute, value: str) -> None:
    # public and private subnet per availability zone
    carve_subnet_cidrs(value, constants.CIDR_MASK, 2 * constants.AZ_COUNT)


@define(slots=True, frozen=True)
class DeploymentConfig:
    image_url: str = field(validator=[validators.instance_of(str), _not_blank])
    environment: str = field(
        default=constants.DEFAULT_ENV,
        validator=validators.matches_re(r"^[a-z][a-z0-9]*$"),
    )
    account: Optional[str] = field(default=None)
    region: Optional[str] = field(default=None)
    vpc_cidr: str = field(default=constants.VPC_CIDR, validator=_fits_address_plan)
    enable_vpc_endpoints: bool = field(default=False, converter=to_bool)

    @classmethod
    def from_app(cls, app: App) -> "DeploymentConfig":
        image_url = app.node.try_get_context(
            constants.IMAGE_URL_CONTEXT_KEY
        ) or os.getenv(constants.IMAGE_URL_ENV_VAR)
        if not image_url:
            logger.error(
                "Container image is not set",
                extra={
                    "context_key": constants.IMAGE_URL_CONTEXT_KEY,
                    "env_var": constants.IMAGE_URL_ENV_VAR,
                },
            )
            raise ValueError(
                f"Container image is required: pass -c {constants.IMAGE_URL_CONTEXT_KEY}=<image> "
                f"or set {constants.IMAGE_URL_ENV_VAR}"
            )

        config = cls(
            image_url=image_url,
            environment=app.node.try_get_context(constants.ENVIRONMENT_CONTEXT_KEY)
            or constants.DEFAULT_ENV,
            account=os.getenv("CDK_DEFAULT_ACCOUNT"),
            region=os.getenv("CDK_DEFAULT_REGION"),
            vpc_cidr=app.node.try_get_context(constants.VPC_CIDR_CONTEXT_KEY)
            or constants.VPC_CIDR,
            enable_vpc_endpoints=app.node.try_get_context(
                constants.VPC_ENDPOINTS_CONTEXT_KEY
            ),
        )
        logger.info(
            "Resolved deployment configuration",
            extra={
                "image_url": config.image_url,
                "environment": config.environment,
                "region": config.region,
                "enable_vpc_endpoints": config.enable_vpc_endpoints,
            },
        )
        return config
