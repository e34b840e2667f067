# src/atlas_infra/binders/secrets_manager.py
"""
Estratégia de binding para AWS Secrets Manager.

Capabilities:
    - secretsmanager:secret   → leitura e gestão de um segredo
    - secretsmanager:rotation → rotação via função Lambda declarada no alvo

O id da chave de criptografia do segredo só é exposto pela passada de
secure mode (`SECRET_KMS_KEY_ID`), junto com a permissão de decrypt.
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


class SecretsManagerBinderStrategy:
    service_type = "secrets-manager"
    category = "Security"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "secretsmanager:secret": TargetShape(("secret_arn", "secret_name")),
        "secretsmanager:rotation": TargetShape(("secret_arn", "rotation_lambda_arn")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Enable automatic rotation for credentials",
        "Encrypt secrets with a customer managed key",
        "Reference secrets by ARN instead of name",
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

        secret_arn = read_attr(target, "secret_arn")

        if binding.capability == "secretsmanager:secret":
            if binding.has_access("read"):
                plan.grant(("secretsmanager:GetSecretValue", "secretsmanager:DescribeSecret"), secret_arn)
            if binding.has_access("write"):
                plan.grant(("secretsmanager:PutSecretValue", "secretsmanager:UpdateSecret"), secret_arn)
            if binding.has_access("admin"):
                plan.grant(
                    (
                        "secretsmanager:DeleteSecret",
                        "secretsmanager:RestoreSecret",
                        "secretsmanager:PutResourcePolicy",
                        "secretsmanager:TagResource",
                    ),
                    secret_arn,
                )
            plan.env("SECRET_ARN", secret_arn)
            plan.env("SECRET_NAME", read_attr(target, "secret_name"))
        else:
            rotation_lambda_arn = read_attr(target, "rotation_lambda_arn")
            if binding.has_access("read"):
                plan.grant(("secretsmanager:DescribeSecret",), secret_arn)
            if binding.has_access("write"):
                plan.grant(
                    (
                        "secretsmanager:RotateSecret",
                        "secretsmanager:PutSecretValue",
                        "secretsmanager:UpdateSecretVersionStage",
                    ),
                    secret_arn,
                )
                plan.grant(("lambda:InvokeFunction",), rotation_lambda_arn)
            if binding.has_access("admin"):
                plan.grant(("secretsmanager:CancelRotateSecret",), secret_arn)
            plan.env("SECRET_ARN", secret_arn)
            plan.env("SECRET_ROTATION_LAMBDA_ARN", rotation_lambda_arn)
            plan.env("SECRET_ROTATION_DAYS", read_attr(target, "rotation_days"))

        apply_secure_mode(plan, target, binding, context, prefix="SECRET", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
