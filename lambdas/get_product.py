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
    product_id = (event.get("pathParameters") or {}).get("id")
    if not product_id:
        return products_store.response(400, {"message": "Missing 'id' path parameter"})

    try:
        product = products_store.get_product(product_id)
    except ClientError as e:
        logger.exception("Get item failed on DynamoDB", product_id=product_id)
        return products_store.error_response(e)

    if product is None:
        logger.info("Product not found", product_id=product_id)
        return products_store.response(404, {"message": "Product not found"})

    metrics.add_metric(name="ProductRetrieved", unit=MetricUnit.Count, value=1)
    return products_store.response(200, product.to_item())
