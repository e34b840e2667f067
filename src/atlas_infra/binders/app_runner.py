# src/atlas_infra/binders/app_runner.py
"""
Estratégia de binding para AWS App Runner.

Capabilities:
    - apprunner:service    → serviço gerenciado (imagem ou código-fonte)
    - apprunner:connection → conexão com o provedor de repositório

Para `apprunner:service`, os recursos opcionais que o alvo declarar
(repositório ECR, VPC connector, certificado, configuração de auto
scaling) recebem permissões de leitura próprias. `PORT` assume 8080
quando o alvo não informa a porta.
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
    has_attr,
    prepare_binding,
    read_attr,
    seed_environment,
)


DEFAULT_PORT = "8080"
DEFAULT_BRANCH = "main"

_OPTIONAL_READS = (
    (
        "ecr_repository_arn",
        (
            "ecr:GetAuthorizationToken",
            "ecr:BatchCheckLayerAvailability",
            "ecr:GetDownloadUrlForLayer",
            "ecr:BatchGetImage",
        ),
    ),
    ("vpc_connector_arn", ("apprunner:DescribeVpcConnector", "apprunner:ListVpcConnectors")),
    ("ssl_certificate_arn", ("acm:DescribeCertificate", "acm:ListCertificates")),
    (
        "auto_scaling_configuration_arn",
        ("apprunner:DescribeAutoScalingConfiguration", "apprunner:ListAutoScalingConfigurations"),
    ),
)


class AppRunnerBinderStrategy:
    service_type = "app-runner"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "apprunner:service": TargetShape(("service_arn", "service_name")),
        "apprunner:connection": TargetShape(("connection_arn", "connection_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use a VPC connector to reach private resources",
        "Tune the auto scaling configuration to the expected concurrency",
        "Attach a custom domain with a managed certificate",
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

        if binding.capability == "apprunner:service":
            self._bind_service(plan, target, binding)
        else:
            self._bind_connection(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="APP_RUNNER", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_service(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        service_arn = read_attr(target, "service_arn")

        if binding.has_access("read"):
            plan.grant(
                (
                    "apprunner:DescribeService",
                    "apprunner:ListServices",
                    "apprunner:DescribeOperation",
                    "apprunner:ListOperations",
                ),
                service_arn,
            )
        if binding.has_access("write"):
            plan.grant(
                (
                    "apprunner:UpdateService",
                    "apprunner:StartDeployment",
                    "apprunner:PauseService",
                    "apprunner:ResumeService",
                ),
                service_arn,
            )
        if binding.has_access("admin"):
            plan.grant(("apprunner:DeleteService", "apprunner:TagResource"), service_arn)
        for field_name, actions in _OPTIONAL_READS:
            if has_attr(target, field_name):
                plan.grant(actions, read_attr(target, field_name))

        plan.env("APP_RUNNER_SERVICE_NAME", read_attr(target, "service_name"))
        plan.env("APP_RUNNER_SERVICE_ARN", service_arn)
        plan.env("APP_RUNNER_SERVICE_URL", read_attr(target, "service_url"))
        plan.env("APP_RUNNER_SERVICE_ID", read_attr(target, "service_id"))
        plan.env("PORT", read_attr(target, "port", DEFAULT_PORT))
        plan.env("VPC_CONNECTOR_ARN", read_attr(target, "vpc_connector_arn"))
        plan.env("CUSTOM_DOMAIN", read_attr(target, "custom_domain"))
        plan.env("SSL_CERTIFICATE_ARN", read_attr(target, "ssl_certificate_arn"))
        plan.env("AUTO_SCALING_CONFIG_ARN", read_attr(target, "auto_scaling_configuration_arn"))

    def _bind_connection(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        connection_arn = read_attr(target, "connection_arn")

        if binding.has_access("read"):
            plan.grant(("apprunner:DescribeConnection", "apprunner:ListConnections"), connection_arn)
        if binding.has_access("write"):
            plan.grant(("apprunner:UpdateConnection",), connection_arn)
        if binding.has_access("admin"):
            plan.grant(("apprunner:DeleteConnection",), connection_arn)

        plan.env("APP_RUNNER_CONNECTION_NAME", read_attr(target, "connection_name"))
        plan.env("APP_RUNNER_CONNECTION_ARN", connection_arn)
        plan.env("APP_RUNNER_PROVIDER", read_attr(target, "provider"))
        plan.env("REPOSITORY_URL", read_attr(target, "repository_url"))
        plan.env("BRANCH_NAME", read_attr(target, "branch_name", DEFAULT_BRANCH))
