import os
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from botocore.exceptions import ClientError

import products_store

logger = Logger(level=os.getenv("POWERTOOLS_LOGGER_LOG_LEVEL", "INFO").upper())
tracer = Tracer()
metrics = Metrics()


@logger.inject_lambda_context
@tracer.capture_lambda_handler
@metrics.log_metrics
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    try:
        products = products_store.list_products()
    except ClientError as e:
        logger.exception("Scan failed on DynamoDB")
        return products_store.error_response(e)

    metrics.add_metric(name="ProductsListed", unit=MetricUnit.Count, value=1)
    logger.info("Listed products", count=len(products))
    return products_store.response(
        200, {"products": [product.to_item() for product in products]}
    )
