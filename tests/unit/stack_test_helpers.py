from dataclasses import dataclass
from typing import Any, Mapping, Optional
from aws_cdk.assertions import Match, Template
from products_api.products_api_stack import ProductsApiStack
from aws_cdk import App

READ_ACTION = "dynamodb:GetItem"
WRITE_ACTION = "dynamodb:PutItem"


# ------------------- Test Case Data Classes -------------------
@dataclass(frozen=True)
class LambdaTestCase:
    id: str
    function_name: str
    handler: str
    table_access: str


@dataclass(frozen=True)
class MethodTestCase:
    path: str
    http_method: str
    handler: str


@dataclass(frozen=True)
class UpdateDeletePolicyTestCase:
    id: str
    update_policy: str
    delete_policy: str


# ------------------- Helper Functions -------------------


def find_resources_by_type(
    template: Template, resource_type: str, props: Optional[dict] = None
) -> Mapping[str, Any]:

    return template.find_resources(resource_type, props=props)


def get_single_resource_id(
    resources: Mapping[str, Any], resource_type: str = "resource"
) -> str:
    assert len(resources) == 1, f"expected exactly one {resource_type}"
    return next(iter(resources))


def single_resource_id_of_type(json_template: Mapping[str, Any], resource_type: str) -> str:
    return get_single_resource_id(
        {
            logical_id: resource
            for logical_id, resource in json_template["Resources"].items()
            if resource["Type"] == resource_type
        },
        resource_type,
    )


def build_template(stack_id: str = "TestProductsApiStack", **stack_kwargs):
    app = App()
    stack = ProductsApiStack(app, stack_id, **stack_kwargs)
    return Template.from_stack(stack)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else [value]


def function_ids_by_handler(json_template: Mapping[str, Any]) -> dict[str, str]:
    return {
        resource["Properties"]["Handler"]: logical_id
        for logical_id, resource in json_template["Resources"].items()
        if resource["Type"] == "AWS::Lambda::Function"
    }


def table_access_by_function(json_template: Mapping[str, Any]) -> dict[str, set[str]]:
    """Map each function logical id to the table access modes its role grants."""
    resources = json_template["Resources"]
    table_id = next(
        logical_id
        for logical_id, resource in resources.items()
        if resource["Type"] == "AWS::DynamoDB::Table"
    )
    table_arn = {"Fn::GetAtt": [table_id, "Arn"]}

    access_by_role: dict[str, set[str]] = {}
    for resource in resources.values():
        if resource["Type"] != "AWS::IAM::Policy":
            continue
        modes = set()
        for statement in resource["Properties"]["PolicyDocument"]["Statement"]:
            if table_arn not in _as_list(statement.get("Resource", [])):
                continue
            actions = _as_list(statement["Action"])
            if READ_ACTION in actions:
                modes.add("read")
            if WRITE_ACTION in actions:
                modes.add("write")
        for role in resource["Properties"]["Roles"]:
            access_by_role.setdefault(role["Ref"], set()).update(modes)

    return {
        logical_id: access_by_role.get(resource["Properties"]["Role"]["Fn::GetAtt"][0], set())
        for logical_id, resource in resources.items()
        if resource["Type"] == "AWS::Lambda::Function"
    }


def resource_paths(json_template: Mapping[str, Any]) -> dict[str, str]:
    """Resolve every API Gateway resource logical id to its full path."""
    resources = {
        logical_id: resource["Properties"]
        for logical_id, resource in json_template["Resources"].items()
        if resource["Type"] == "AWS::ApiGateway::Resource"
    }

    def path_of(logical_id: str) -> str:
        props = resources[logical_id]
        parent = props["ParentId"]
        prefix = path_of(parent["Ref"]) if "Ref" in parent else ""
        return f"{prefix}/{props['PathPart']}"

    return {logical_id: path_of(logical_id) for logical_id in resources}


def method_bindings(json_template: Mapping[str, Any]) -> dict[tuple[str, str], str]:
    """Map (path, http method) to the logical id of the integrated function."""
    paths = resource_paths(json_template)
    bindings = {}
    for resource in json_template["Resources"].values():
        if resource["Type"] != "AWS::ApiGateway::Method":
            continue
        props = resource["Properties"]
        uri_parts = props["Integration"]["Uri"]["Fn::Join"][1]
        function_id = next(
            part["Fn::GetAtt"][0]
            for part in uri_parts
            if isinstance(part, dict) and "Fn::GetAtt" in part
        )
        path = paths[props["ResourceId"]["Ref"]]
        bindings[(path, props["HttpMethod"])] = function_id
    return bindings


def render_join(value: Any) -> str:
    """Flatten an Fn::Join into a string, replacing tokens with a placeholder."""
    if isinstance(value, str):
        return value
    delimiter, parts = value["Fn::Join"]
    return delimiter.join(
        part if isinstance(part, str) else "<token>" for part in parts
    )


def expected_lambda_props(case: LambdaTestCase) -> Mapping[str, Any]:
    return {
        "FunctionName": Match.string_like_regexp(case.function_name),
        "Handler": case.handler,
        "Runtime": "python3.12",
        "MemorySize": 256,
        "Architectures": ["x86_64"],
        "Code": {
            "S3Bucket": Match.any_value(),
            "S3Key": Match.any_value(),
        },
        "TracingConfig": {"Mode": "Active"},
        "LoggingConfig": {"LogGroup": Match.any_value()},
    }
