from aws_cdk import (
    CfnOutput,
    RemovalPolicy,
    Stack,
    aws_s3 as s3,
    aws_ssm as ssm,
)
from constructs import Construct

from common.stack_context import StackContext
from common.state_backend import RemoteStateBackend


class StateBackendStack(Stack):
    """Bucket that holds the provisioning engine's record of the web service topology."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        backend: RemoteStateBackend,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.context = StackContext(scope=self)
        self.backend = backend

        self.state_bucket = self._build_state_bucket()
        self.create_state_location_ssm_parameter()

        CfnOutput(self, "StateBucketName", value=self.state_bucket.bucket_name)
        CfnOutput(self, "StateObjectUri", value=backend.state_uri)

    def create_state_location_ssm_parameter(self) -> ssm.StringParameter:
        """Persist the state object location in SSM"""
        return ssm.StringParameter(
            self,
            self.context.build_resource_id("StateLocation"),
            description="Remote state object of the web service topology",
            parameter_name=f"/{self.context.service}/state-backend/location",
            string_value=self.backend.state_uri,
        )

    def _build_state_bucket(self) -> s3.Bucket:
        # no explicit configuration leaves the bucket on the S3 default
        encryption = s3.BucketEncryption.S3_MANAGED if self.backend.encrypt else None
        return s3.Bucket(
            self,
            self.context.build_resource_id("StateBucket"),
            bucket_name=self.backend.bucket,
            versioned=True,
            encryption=encryption,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            enforce_ssl=True,
            removal_policy=RemovalPolicy.RETAIN,
        )
