import json
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


@tracer.capture_method
def parse_product(product_id: str, body: str | None) -> products_store.Product:
    """Build the product from the request body.

    Raises ValueError when the body is not a JSON product or names another id.
    """
    if not body:
        raise ValueError("Empty request body")
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise ValueError("Failed to parse product from request body") from e
    if not isinstance(payload, dict):
        raise ValueError("Product must be a JSON object")
    if payload.get("id") != product_id:
        raise ValueError("Product ID in path does not match product ID in body")
    try:
        return products_store.Product(
            id=payload["id"], name=payload["name"], price=payload["price"]
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid product: {e}") from e


@logger.inject_lambda_context
@tracer.capture_lambda_handler
@metrics.log_metrics
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    product_id = (event.get("pathParameters") or {}).get("id")
    if not product_id:
        return products_store.response(400, {"message": "Missing 'id' path parameter"})

    try:
        product = parse_product(product_id, event.get("body"))
    except ValueError as e:
        logger.warning("Rejected product", product_id=product_id, reason=str(e))
        return products_store.response(400, {"message": str(e)})

    try:
        products_store.put_product(product)
    except ClientError as e:
        logger.exception("Put item failed on DynamoDB", product_id=product_id)
        return products_store.error_response(e)

    metrics.add_metric(name="ProductCreated", unit=MetricUnit.Count, value=1)
    logger.info("Stored product", product_id=product_id)
    return products_store.response(201, {"message": "Product created"})
