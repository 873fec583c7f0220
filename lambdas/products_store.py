import json
import os
from decimal import Decimal
from functools import lru_cache
from typing import Any, Optional

import boto3
from attrs import asdict, define, field
from attrs.validators import instance_of
from boto3.dynamodb.types import DYNAMODB_CONTEXT
from botocore.exceptions import ClientError

JSON_HEADERS = {"Content-Type": "application/json"}


def to_dynamodb_number(value: Any) -> Decimal:
    """Convert a price to a Decimal DynamoDB can store.

    Raises ValueError for non-numeric, non-finite or over-precise values.
    """
    try:
        number = DYNAMODB_CONTEXT.create_decimal(str(value))
    except ArithmeticError as e:
        raise ValueError(f"Price {value!r} is out of DynamoDB number range") from e
    if not number.is_finite():
        raise ValueError(f"Price must be a finite number, got {value!r}")
    return number


@define(slots=True, kw_only=True, frozen=True)
class Product:
    id: str = field(validator=instance_of(str))  # Partition Key
    name: str = field(validator=instance_of(str))
    price: Decimal = field(converter=to_dynamodb_number)

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Product":
        return cls(id=item["id"], name=item["name"], price=item["price"])

    def to_item(self) -> dict[str, Any]:
        return asdict(self)


@lru_cache(maxsize=1)
def get_table():
    # One resource per execution environment so warm invocations reuse connections
    dynamodb_endpoint = os.getenv("DYNAMODB_ENDPOINT", None)
    dynamodb_resource = boto3.resource("dynamodb", endpoint_url=dynamodb_endpoint)
    return dynamodb_resource.Table(os.environ["TABLE_NAME"])


def list_products() -> list[Product]:
    table = get_table()
    response = table.scan()
    items = response.get("Items", [])
    while "LastEvaluatedKey" in response:
        response = table.scan(ExclusiveStartKey=response["LastEvaluatedKey"])
        items.extend(response.get("Items", []))
    return [Product.from_item(item) for item in items]


def get_product(product_id: str) -> Optional[Product]:
    response = get_table().get_item(Key={"id": product_id})
    item = response.get("Item")
    return Product.from_item(item) if item else None


def put_product(product: Product) -> None:
    get_table().put_item(Item=product.to_item())


def delete_product(product_id: str) -> None:
    get_table().delete_item(Key={"id": product_id})


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": json.dumps(body, default=_json_default),
    }


def error_response(e: ClientError) -> dict[str, Any]:
    error_info = (e.response or {}).get("Error", {})
    return response(
        500,
        {
            "error": error_info.get("Code", "UnknownError"),
            "message": error_info.get("Message", "Unknown"),
        },
    )
