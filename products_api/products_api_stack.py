from typing import Optional

from aws_cdk import (
    CfnOutput,
    RemovalPolicy,
    Stack,
    aws_apigateway as apigw,
    aws_dynamodb as dynamodb,
    aws_lambda as _lambda,
)
from constructs import Construct
import common.constants as constants
from common.stack_context import StackContext
from products_api.function_settings import FunctionSettings, PackagingOptions


class ProductsApiStack(Stack):

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        table_removal_policy: Optional[RemovalPolicy] = RemovalPolicy.DESTROY,
        deployment_env: str = constants.DEFAULT_ENV,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.context = StackContext(scope=self, env=deployment_env)

        env_variables = self.context.build_powertools_environment()

        # DynamoDB table holding every product, keyed by id
        self.products_table = self._build_dynamodb(table_removal_policy)

        self.function_settings = self._build_function_settings(env_variables)

        # One Lambda function per route
        self.get_products_function = self._build_products_lambda(constants.ACTION_LIST)
        self.get_product_function = self._build_products_lambda(constants.ACTION_GET)
        self.put_product_function = self._build_products_lambda(constants.ACTION_PUT)
        self.delete_product_function = self._build_products_lambda(
            constants.ACTION_DELETE
        )

        # Permissions
        # readers
        self.products_table.grant_read_data(self.get_products_function)
        self.products_table.grant_read_data(self.get_product_function)

        # writers
        self.products_table.grant_write_data(self.put_product_function)
        self.products_table.grant_write_data(self.delete_product_function)

        # API Gateway
        self.api = self._build_rest_api()
        self._add_products_routes(self.api)

        self.api_url_output = CfnOutput(
            self,
            constants.API_URL_OUTPUT_ID,
            value=self.api.url + constants.PRODUCTS_RESOURCE_PATH,
        )

    # Resource creation

    def _build_dynamodb(
        self, removal_policy: Optional[RemovalPolicy]
    ) -> dynamodb.Table:
        return dynamodb.Table(
            self,
            id=self.context.build_resource_id("Table"),
            table_name=constants.PRODUCTS_TABLE_NAME,
            partition_key=dynamodb.Attribute(
                name=constants.PRODUCTS_TABLE_PARTITION_KEY,
                type=dynamodb.AttributeType.STRING,
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=removal_policy,
        )

    def _build_function_settings(self, env_variables: dict[str, str]) -> FunctionSettings:
        packaging = PackagingOptions.from_asset(
            self,
            layer_id=self.context.build_resource_id("LambdaPowerToolsLayer"),
            layer_arn=self.context.build_power_tools_layer_arn(),
        )
        return FunctionSettings(
            environment={
                constants.TABLE_NAME_ENV: self.products_table.table_name,
                **env_variables,
            },
            packaging=packaging,
        )

    def _build_products_lambda(self, action: str) -> _lambda.Function:
        entry = constants.ENTRY_MODULES[action]
        log_group = self.context.build_log_group(
            "Function",
            action=action,
            retention=self.function_settings.log_retention,
        )
        return _lambda.Function(
            self,
            self.context.build_resource_id("Function", action=action),
            function_name=self.context.build_resource_name("Function", action=action),
            handler=f"{entry}.{constants.FUNCTION_HANDLER}",
            description=f"Products API {action} handler backed by DynamoDB {constants.PRODUCTS_TABLE_NAME}",
            log_group=log_group,
            **self.function_settings.function_props(),
        )

    def _build_rest_api(self) -> apigw.RestApi:
        """Create the REST API front door with traced, logged, metered stage."""
        return apigw.RestApi(
            self,
            constants.PRODUCTS_API_NAME,
            rest_api_name=constants.PRODUCTS_API_NAME,
            # stage logging needs the account level CloudWatch role
            cloud_watch_role=True,
            deploy_options=apigw.StageOptions(
                tracing_enabled=True,
                data_trace_enabled=True,
                logging_level=apigw.MethodLoggingLevel.INFO,
                metrics_enabled=True,
            ),
        )

    def _add_products_routes(self, api: apigw.RestApi) -> None:
        products = api.root.add_resource(constants.PRODUCTS_RESOURCE_PATH)
        products.add_method(
            "GET", apigw.LambdaIntegration(self.get_products_function)
        )

        product = products.add_resource(constants.PRODUCT_ID_RESOURCE_PATH)
        product.add_method("GET", apigw.LambdaIntegration(self.get_product_function))
        product.add_method("PUT", apigw.LambdaIntegration(self.put_product_function))
        product.add_method(
            "DELETE", apigw.LambdaIntegration(self.delete_product_function)
        )
