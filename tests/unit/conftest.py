import os
from dataclasses import dataclass
from typing import Any, Mapping

import pytest
from aws_cdk.assertions import Template

from stack_test_helpers import build_template

# Handlers read their configuration at import time
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TABLE_NAME", "Products")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "serverless-python-demo")
os.environ.setdefault("POWERTOOLS_LOGGER_LOG_LEVEL", "WARN")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "AwsSamples")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")


@dataclass
class FakeLambdaContext:
    function_name: str = "products-api-test-function-dev"
    memory_limit_in_mb: int = 256
    invoked_function_arn: str = (
        "arn:aws:lambda:us-east-1:123456789012:function:products-api-test-function-dev"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    return FakeLambdaContext()


@pytest.fixture(scope="module")
def template() -> Template:
    return build_template()


@pytest.fixture(scope="module")
def json_template(template: Template) -> Mapping[str, Any]:
    return template.to_json()
