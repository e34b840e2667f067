# src/atlas_infra/binders/lambda_.py
"""
Estratégia de binding para funções AWS Lambda.

Capabilities:
    - lambda:function → função (versão $LATEST)
    - lambda:alias    → alias publicado de uma função
"""

from __future__ import annotations

from typing import Any

from atlas_infra.core.binding import (
    BindingContext,
    BindingPlan,
    ComponentBinding,
    SourceComponent,
    TargetShape,
    apply_secure_mode,
    commit_binding,
    prepare_binding,
    read_attr,
    seed_environment,
)


class LambdaBinderStrategy:
    service_type = "lambda"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin", "invoke"})
    shapes = {
        "lambda:function": TargetShape(("function_arn", "function_name")),
        "lambda:alias": TargetShape(("alias_arn", "alias_name", "function_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Invoke through an alias to decouple callers from versions",
        "Configure reserved concurrency for critical functions",
        "Enable active tracing for distributed calls",
    )

    def bind(
        self,
        source: SourceComponent,
        target: Any,
        binding: ComponentBinding,
        context: BindingContext,
    ) -> None:
        prepare_binding(
            binding,
            target,
            service_type=self.service_type,
            shapes=self.shapes,
            accepted_access=self.accepted_access,
        )
        plan = BindingPlan()
        seed_environment(plan, binding)

        if binding.capability == "lambda:function":
            function_arn = read_attr(target, "function_arn")
            if binding.has_access("read"):
                plan.grant(
                    (
                        "lambda:GetFunction",
                        "lambda:GetFunctionConfiguration",
                        "lambda:ListVersionsByFunction",
                        "lambda:ListAliases",
                    ),
                    function_arn,
                )
            if binding.has_access("write"):
                plan.grant(
                    ("lambda:UpdateFunctionCode", "lambda:UpdateFunctionConfiguration", "lambda:PublishVersion"),
                    function_arn,
                )
            if binding.has_access("admin"):
                plan.grant(
                    (
                        "lambda:AddPermission",
                        "lambda:RemovePermission",
                        "lambda:PutFunctionConcurrency",
                        "lambda:DeleteFunction",
                    ),
                    function_arn,
                )
            if binding.has_access("invoke"):
                plan.grant(("lambda:InvokeFunction",), function_arn)

            plan.env("LAMBDA_FUNCTION_NAME", read_attr(target, "function_name"))
            plan.env("LAMBDA_FUNCTION_ARN", function_arn)
            plan.env("LAMBDA_FUNCTION_URL", read_attr(target, "function_url"))
        else:
            alias_arn = read_attr(target, "alias_arn")
            if binding.has_access("read"):
                plan.grant(("lambda:GetAlias",), alias_arn)
            if binding.has_access("write"):
                plan.grant(("lambda:UpdateAlias",), alias_arn)
            if binding.has_access("admin"):
                plan.grant(("lambda:DeleteAlias",), alias_arn)
            if binding.has_access("invoke"):
                plan.grant(("lambda:InvokeFunction",), alias_arn)

            plan.env("LAMBDA_FUNCTION_NAME", read_attr(target, "function_name"))
            plan.env("LAMBDA_ALIAS_NAME", read_attr(target, "alias_name"))
            plan.env("LAMBDA_ALIAS_ARN", alias_arn)
            plan.env("LAMBDA_FUNCTION_VERSION", read_attr(target, "function_version"))

        apply_secure_mode(plan, target, binding, context, prefix="LAMBDA", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
