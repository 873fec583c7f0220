from typing import Any, Mapping

from attrs import define, field
from aws_cdk import aws_lambda as _lambda, aws_logs as logs
from constructs import Construct

import common.constants as constants


@define(slots=True, frozen=True)
class PackagingOptions:
    """How the products handlers are shipped.

    The handlers are plain modules in one asset directory. Their third party
    runtime dependencies come from the Powertools layer, so no build step runs
    at synth time.
    """

    code: _lambda.Code
    layers: list[_lambda.ILayerVersion] = field(factory=list)

    @classmethod
    def from_asset(
        cls,
        scope: Construct,
        layer_id: str,
        layer_arn: str,
        path: str = constants.LAMBDA_SRC,
        exclude: list[str] | None = None,
    ) -> "PackagingOptions":
        code = _lambda.Code.from_asset(
            path,
            exclude=exclude if exclude is not None else constants.LAMBDA_ASSET_EXCLUDE,
        )
        layer = _lambda.LayerVersion.from_layer_version_arn(
            scope, layer_id, layer_version_arn=layer_arn
        )
        return cls(code=code, layers=[layer])


@define(slots=True, frozen=True)
class FunctionSettings:
    """Configuration shared by every products function."""

    environment: Mapping[str, str]
    packaging: PackagingOptions
    runtime: _lambda.Runtime = constants.PYTHON_RUNTIME
    architecture: _lambda.Architecture = constants.DEFAULT_ARCHITECTURE
    memory_size: int = constants.FUNCTION_MEMORY_SIZE
    log_retention: logs.RetentionDays = constants.FUNCTION_LOG_RETENTION
    tracing: _lambda.Tracing = _lambda.Tracing.ACTIVE

    def function_props(self) -> dict[str, Any]:
        return {
            "runtime": self.runtime,
            "architecture": self.architecture,
            "memory_size": self.memory_size,
            "tracing": self.tracing,
            "environment": dict(self.environment),
            "code": self.packaging.code,
            "layers": list(self.packaging.layers),
        }
