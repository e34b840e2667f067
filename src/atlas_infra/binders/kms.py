# src/atlas_infra/binders/kms.py
"""
Estratégia de binding para AWS KMS.

Capabilities:
    - kms:key   → uso criptográfico e gestão de uma chave
    - kms:alias → uso via alias
    - kms:grant → gestão de um grant existente

Decisões arquiteturais:
    - `encrypt` e `decrypt` são modos independentes (least privilege)
    - `policy` cobre a política da chave e a criação de grants
    - A passada de secure mode não emite permissões de chave adicionais:
      o alvo já é a chave
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


_ENCRYPT = ("kms:Encrypt", "kms:GenerateDataKey", "kms:GenerateDataKeyWithoutPlaintext", "kms:ReEncryptTo")
_DECRYPT = ("kms:Decrypt", "kms:ReEncryptFrom")


class KmsBinderStrategy:
    service_type = "kms"
    category = "Security"
    accepted_access = frozenset({"read", "write", "admin", "encrypt", "decrypt", "policy"})
    shapes = {
        "kms:key": TargetShape(("key_arn", "key_id")),
        "kms:alias": TargetShape(("alias_arn", "alias_name")),
        "kms:grant": TargetShape(("key_arn", "grant_id")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Configure key policies for access control",
        "Enable automatic key rotation for compliance",
        "Use grants for temporary delegated access",
        "Prefer aliases over key ids in application configuration",
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

        handler = {
            "kms:key": self._bind_key,
            "kms:alias": self._bind_alias,
            "kms:grant": self._bind_grant,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(
            plan,
            target,
            binding,
            context,
            prefix="KMS",
            scope=f"binding.{self.service_type}",
            encryption=False,
        )
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_key(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        key_arn = read_attr(target, "key_arn")

        if binding.has_access("read"):
            plan.grant(("kms:DescribeKey", "kms:GetKeyRotationStatus", "kms:ListResourceTags"), key_arn)
        if binding.has_access("write"):
            plan.grant(("kms:TagResource", "kms:UntagResource", "kms:UpdateKeyDescription"), key_arn)
        if binding.has_access("admin"):
            plan.grant(
                (
                    "kms:EnableKeyRotation",
                    "kms:DisableKeyRotation",
                    "kms:EnableKey",
                    "kms:DisableKey",
                    "kms:ScheduleKeyDeletion",
                    "kms:CancelKeyDeletion",
                ),
                key_arn,
            )
        if binding.has_access("encrypt"):
            plan.grant(_ENCRYPT, key_arn)
        if binding.has_access("decrypt"):
            plan.grant(_DECRYPT, key_arn)
        if binding.has_access("policy"):
            plan.grant(("kms:GetKeyPolicy", "kms:PutKeyPolicy", "kms:CreateGrant"), key_arn)

        plan.env("KMS_KEY_ID", read_attr(target, "key_id"))
        plan.env("KMS_KEY_ARN", key_arn)
        plan.env("KMS_KEY_USAGE", read_attr(target, "key_usage"))
        plan.env("KMS_KEY_SPEC", read_attr(target, "key_spec"))

    def _bind_alias(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        alias_arn = read_attr(target, "alias_arn")

        if binding.has_access("read"):
            plan.grant(("kms:DescribeKey",), alias_arn)
        if binding.has_access("write"):
            plan.grant(("kms:UpdateAlias",), alias_arn)
        if binding.has_access("admin"):
            plan.grant(("kms:CreateAlias", "kms:DeleteAlias"), alias_arn)
        if binding.has_access("encrypt"):
            plan.grant(_ENCRYPT, alias_arn)
        if binding.has_access("decrypt"):
            plan.grant(_DECRYPT, alias_arn)
        if binding.has_access("policy") and has_attr(target, "target_key_arn"):
            plan.grant(("kms:GetKeyPolicy", "kms:PutKeyPolicy"), read_attr(target, "target_key_arn"))

        plan.env("KMS_ALIAS_NAME", read_attr(target, "alias_name"))
        plan.env("KMS_ALIAS_ARN", alias_arn)
        plan.env("KMS_KEY_ARN", read_attr(target, "target_key_arn"))

    def _bind_grant(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        key_arn = read_attr(target, "key_arn")

        if binding.has_access("read"):
            plan.grant(("kms:ListGrants",), key_arn)
        if binding.has_access("write", "policy"):
            plan.grant(("kms:CreateGrant",), key_arn)
        if binding.has_access("admin"):
            plan.grant(("kms:RetireGrant", "kms:RevokeGrant"), key_arn)
        if binding.has_access("encrypt"):
            plan.grant(_ENCRYPT, key_arn)
        if binding.has_access("decrypt"):
            plan.grant(_DECRYPT, key_arn)

        plan.env("KMS_GRANT_ID", read_attr(target, "grant_id"))
        plan.env("KMS_KEY_ARN", key_arn)
        plan.env("KMS_GRANT_TOKEN", read_attr(target, "grant_token"))
        plan.env("KMS_GRANT_OPERATIONS", read_attr(target, "operations"))
