from pathlib import Path

from aws_cdk import aws_lambda as _lambda, aws_logs as logs

POWER_TOOLS_PYTHON_RUNTIME = "python312"
POWER_TOOLS_LAMBDA_LAYER_NAME = "AWSLambdaPowertoolsPythonV3"
POWER_TOOLS_LAMBDA_LAYER_ACCOUNT = "017000801446"
POWER_TOOLS_VERSION = "18"
POWER_TOOLS_ARCHITECTURE = "x86_64"
POWER_TOOLS_LAYER = "arn:aws:lambda:{region}:{lambda_layer_account}:layer:{power_tools_type}-{runtime}-{architecture}:{version}"

PYTHON_RUNTIME = _lambda.Runtime.PYTHON_3_12
DEFAULT_ARCHITECTURE = _lambda.Architecture.X86_64
FUNCTION_MEMORY_SIZE = 256
FUNCTION_LOG_RETENTION = logs.RetentionDays.ONE_WEEK
FUNCTION_HANDLER = "handler"

# Lambda asset, resolved against the repository root so synth works from any cwd
LAMBDA_SRC = str(Path(__file__).resolve().parent.parent / "lambdas")
LAMBDA_ASSET_EXCLUDE = ["tests", "__pycache__", "*.pyc", ".pytest_cache"]

DEFAULT_ENV = "dev"

# Naming convention components
SERVICE_NAME = "products"  # The application name
COMPONENT = "api"  # The functional component/subsystem

# Lambda action types (used in naming)
ACTION_LIST = "list"  # Reads every product
ACTION_GET = "get"  # Reads one product
ACTION_PUT = "put"  # Creates or replaces one product
ACTION_DELETE = "delete"  # Deletes one product

# Entry modules inside LAMBDA_SRC, one per action
ENTRY_MODULES = {
    ACTION_LIST: "get_products",
    ACTION_GET: "get_product",
    ACTION_PUT: "put_product",
    ACTION_DELETE: "delete_product",
}

PRODUCTS_TABLE_NAME = "Products"
PRODUCTS_TABLE_PARTITION_KEY = "id"
PRODUCTS_API_NAME = "ProductsApi"
PRODUCTS_RESOURCE_PATH = "products"
PRODUCT_ID_RESOURCE_PATH = "{id}"
API_URL_OUTPUT_ID = "ApiURL"

# Runtime configuration surfaced to every function
TABLE_NAME_ENV = "TABLE_NAME"
POWERTOOLS_SERVICE_NAME = "serverless-python-demo"
POWERTOOLS_LOGGER_LOG_LEVEL = "WARN"
POWERTOOLS_LOGGER_SAMPLE_RATE = "0.01"
POWERTOOLS_LOGGER_LOG_EVENT = "true"
POWERTOOLS_METRICS_NAMESPACE = "AwsSamples"
