from typing import Any, Mapping

from attrs import define, field, fields, validators
from aws_cdk import App

import common.constants as constants
from common.deployment_config import to_bool
from common.logger import logger

# https://docs.aws.amazon.com/AmazonS3/latest/userguide/bucketnamingrules.html
S3_BUCKET_NAME_PATTERN = r"^(?!xn--)(?!.*\.\.)[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$"
AWS_REGION_PATTERN = r"^[a-z]{2}(-gov)?-[a-z]+-\d$"


def _relative_key(instance, attribute, value: str) -> None:
    if not value or value.startswith("/"):
        raise ValueError(f"{attribute.name} must be a non-empty key relative to the bucket root")


@define(slots=True, frozen=True)
class RemoteStateBackend:
    """Where the provisioning engine persists its record of real-world resources."""

    bucket: str = field(
        default=constants.STATE_BUCKET,
        validator=validators.matches_re(S3_BUCKET_NAME_PATTERN),
    )
    key: str = field(
        default=constants.STATE_KEY,
        validator=[validators.instance_of(str), _relative_key],
    )
    region: str = field(
        default=constants.STATE_REGION,
        validator=validators.matches_re(AWS_REGION_PATTERN),
    )
    encrypt: bool = field(default=constants.STATE_ENCRYPT, converter=to_bool)

    @property
    def state_uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Any] | None) -> "RemoteStateBackend":
        """Build the binding from a partial mapping, e.g. ``{"bucket": "other-state"}``."""
        if overrides is None:
            overrides = {}
        if not isinstance(overrides, Mapping):
            raise ValueError(
                f"{constants.STATE_BACKEND_CONTEXT_KEY} must be a mapping, got {overrides!r}"
            )
        known = {attribute.name for attribute in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(
                f"Unknown {constants.STATE_BACKEND_CONTEXT_KEY} settings: {', '.join(unknown)}"
            )
        return cls(**overrides)

    @classmethod
    def from_app(cls, app: App) -> "RemoteStateBackend":
        backend = cls.from_overrides(
            app.node.try_get_context(constants.STATE_BACKEND_CONTEXT_KEY)
        )
        logger.info(
            "Resolved remote state backend",
            extra={
                "state_uri": backend.state_uri,
                "region": backend.region,
                "encrypt": backend.encrypt,
            },
        )
        return backend
