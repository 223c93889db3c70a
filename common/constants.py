DEFAULT_ENV = "dev"
DEFAULT_REGION = "us-east-1"
LOG_LEVEL = "INFO"

# Naming convention components
SERVICE_NAME = "v"  # The project prefix
COMPONENT = "web"  # The functional component/subsystem
LOGGER_SERVICE_NAME = "v-web-infra"

# Deployment inputs (CDK context keys / environment fallbacks)
IMAGE_URL_CONTEXT_KEY = "image_url"
IMAGE_URL_ENV_VAR = "IMAGE_URL"
ENVIRONMENT_CONTEXT_KEY = "environment"
VPC_ENDPOINTS_CONTEXT_KEY = "enable_vpc_endpoints"
VPC_CIDR_CONTEXT_KEY = "vpc_cidr"
STATE_BACKEND_CONTEXT_KEY = "state_backend"

# Network
VPC_CIDR = "10.0.0.0/16"
CIDR_MASK = 24
AZ_COUNT = 2
ANY_IPV4_CIDR = "0.0.0.0/0"
PUBLIC_SUBNET_NAME = "Public"
PRIVATE_SUBNET_NAME = "Private"

# Load balancing
HTTP_PORT = 80
HEALTH_CHECK_PATH = "/"

# Compute
TASK_CPU = 256
TASK_MEMORY_MIB = 512
DESIRED_COUNT = 1
CONTAINER_NAME = "web"
CONTAINER_PORT = 80
LOG_STREAM_PREFIX = "ecs"

# Identity
ECS_TASKS_SERVICE_PRINCIPAL = "ecs-tasks.amazonaws.com"
ECS_TASK_EXECUTION_POLICY = "service-role/AmazonECSTaskExecutionRolePolicy"

# Remote state
STATE_BUCKET = "v-backend-s3"
STATE_KEY = "us-east-1/terraform.tfstate"
STATE_REGION = "us-east-1"
STATE_ENCRYPT = True
