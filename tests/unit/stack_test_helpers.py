from dataclasses import dataclass
from typing import Any, Mapping, Optional
from aws_cdk.assertions import Template
from aws_cdk import App
from common.state_backend import RemoteStateBackend
from state_backend.state_backend_stack import StateBackendStack
from web_service.web_service_stack import WebServiceStack
import pytest

TEST_IMAGE_URL = "public.ecr.aws/nginx/nginx:1.27"


# ------------------- Test Case Data Classes -------------------
@dataclass(frozen=True)
class SubnetTestCase:
    id: str
    cidr_block: str
    map_public_ip_on_launch: bool
    az_index: int


@dataclass(frozen=True)
class UpdateDeletePolicyTestCase:
    id: str
    update_policy: str
    delete_policy: str


# ------------------- Helper Functions -------------------


def find_resources_by_type(
    template: Template, resource_type: str, props: Optional[dict] = None
) -> Mapping[str, Any]:

    return template.find_resources(resource_type, props=props)


def get_single_resource_id(
    resources: Mapping[str, Any], resource_type: str = "resource"
) -> str:
    assert len(resources) == 1, f"expected exactly one {resource_type}, got {len(resources)}"
    return next(iter(resources))


def build_stack(stack_id: str = "TestWebServiceStack", **kwargs) -> WebServiceStack:
    app = App()
    return WebServiceStack(app, stack_id, image_url=TEST_IMAGE_URL, **kwargs)


def build_template(stack_id: str = "TestWebServiceStack", **kwargs) -> Template:
    return Template.from_stack(build_stack(stack_id, **kwargs))


def build_state_backend_template(
    backend: Optional[RemoteStateBackend] = None,
    stack_id: str = "TestStateBackendStack",
) -> Template:
    app = App()
    stack = StateBackendStack(app, stack_id, backend=backend or RemoteStateBackend())
    return Template.from_stack(stack)


# ------------------- Pytest Fixtures -------------------


@pytest.fixture
def template() -> Template:
    return build_template()


@pytest.fixture
def json_template(template: Template) -> Mapping[str, Any]:
    return template.to_json()


@pytest.fixture
def state_backend_template() -> Template:
    return build_state_backend_template()
