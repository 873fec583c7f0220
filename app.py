#!/usr/bin/env python3
"""AWS CDK entrypoint for provisioning the Products API.

The stack is deployed into the account and region the CDK CLI resolves by
default. Pass ``-c env=<name>`` to tag function and log group names with a
deployment environment other than ``dev``.
"""
import os

import aws_cdk as cdk
from aws_cdk import Environment

import common.constants as constants
from products_api.products_api_stack import ProductsApiStack

app = cdk.App()

env = Environment(
    account=os.getenv("CDK_DEFAULT_ACCOUNT"),
    region=os.getenv("CDK_DEFAULT_REGION"),
)

ProductsApiStack(
    app,
    "ProductsApiStack",
    deployment_env=app.node.try_get_context("env") or constants.DEFAULT_ENV,
    env=env,
    description="Serverless products REST API backed by Lambda and DynamoDB",
)

app.synth()
