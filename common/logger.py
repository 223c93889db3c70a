import os

from aws_lambda_powertools import Logger

from common import constants

logger = Logger(
    service=constants.LOGGER_SERVICE_NAME,
    level=os.getenv("LOG_LEVEL", constants.LOG_LEVEL).upper(),
)
