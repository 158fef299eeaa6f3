# lambda_function.py
import logging

import boto3

from .config import Settings
from .dispatcher import Dispatcher
from .store import CourseStore

settings = Settings.from_env()

logging.getLogger().setLevel(settings.log_level)
logger = logging.getLogger(__name__)

# built on first invocation, reused across warm invocations
_dispatcher = None


def build_dispatcher(settings):
    client = boto3.client(
        "dynamodb",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
    )
    logger.info("dynamodb client ready table=%s", settings.table_name)
    return Dispatcher(CourseStore(client, settings.table_name))


def get_dispatcher():
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = build_dispatcher(settings)
    return _dispatcher


def handler(event, context):
    return get_dispatcher().handle(event)

# keeps both handler names working in the function configuration
lambda_handler = handler
