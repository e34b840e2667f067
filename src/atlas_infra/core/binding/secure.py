# src/atlas_infra/core/binding/secure.py
"""
Passada de secure mode compartilhada pelas estratégias de binding.

Quando as `options` do descriptor ligam qualquer toggle reconhecido, a
estratégia executa uma passada adicional que pode emitir:

    - permissões de chave KMS + entrada com o id da chave
      (apenas se o alvo declara uma chave)
    - entradas de posicionamento de rede
      (apenas os campos de VPC/subnets/security groups declarados pelo alvo)
    - entrada de retenção de backup
      (apenas se as options ou o alvo declaram uma retenção)
    - entradas de audit logging (sempre, com secure mode ligado)

Decisões arquiteturais:
    - Funções livres recebidas pelas estratégias, sem classe base
    - Cada ramo condicional depende da presença concreta de um atributo
      do alvo ou de uma option, nunca de configuração global
    - Toda permissão emitida é escopada a um campo lido do alvo
    - Uma chave declarada que não é string falha o binding, nunca é pulada

Toggles reconhecidos:
    - requireSecureAccess
    - requireSecureNetworking
    - enableEncryption
"""

from __future__ import annotations

from typing import Any, Sequence

from .context import BindingContext
from .descriptor import ComponentBinding
from .errors import InvalidTargetAttributeError
from .plan import BindingPlan
from .target import first_attr, has_attr, read_attr


REQUIRE_SECURE_ACCESS = "requireSecureAccess"
REQUIRE_SECURE_NETWORKING = "requireSecureNetworking"
ENABLE_ENCRYPTION = "enableEncryption"

SECURE_TOGGLES = (REQUIRE_SECURE_ACCESS, REQUIRE_SECURE_NETWORKING, ENABLE_ENCRYPTION)

BACKUP_RETENTION_OPTION = "backupRetentionDays"

DEFAULT_KEY_FIELDS = ("kms_key_arn", "kms_key_id")
KMS_DATA_ACTIONS = ("kms:Decrypt", "kms:GenerateDataKey")

_NETWORK_FIELDS = (
    ("vpc_id", "VPC_ID"),
    ("subnet_ids", "SUBNET_IDS"),
    ("security_group_ids", "SECURITY_GROUP_IDS"),
)


def secure_mode_enabled(binding: ComponentBinding) -> bool:
    """True se qualquer toggle reconhecido estiver explicitamente ligado."""
    return any(binding.options.get(t) is True for t in SECURE_TOGGLES)


def seed_environment(plan: BindingPlan, binding: ComponentBinding) -> None:
    """Registra o `env` do descriptor primeiro, para que a estratégia prevaleça."""
    for key, value in binding.env.items():
        plan.env(key, value)


def emit_encryption(
    plan: BindingPlan,
    target: Any,
    *,
    prefix: str,
    key_fields: Sequence[str] = DEFAULT_KEY_FIELDS,
) -> bool:
    field_name, key = first_attr(target, *key_fields)
    if field_name is None:
        return False
    if not isinstance(key, str):
        raise InvalidTargetAttributeError(field_name, key)
    plan.env(f"{prefix}_KMS_KEY_ID", key)
    plan.grant(KMS_DATA_ACTIONS, key)
    return True


def emit_network_placement(plan: BindingPlan, target: Any, *, prefix: str) -> int:
    emitted = 0
    for field_name, suffix in _NETWORK_FIELDS:
        if has_attr(target, field_name):
            plan.env(f"{prefix}_{suffix}", read_attr(target, field_name))
            emitted += 1
    return emitted


def emit_backup_retention(plan: BindingPlan, target: Any, binding: ComponentBinding, *, prefix: str) -> bool:
    days = binding.options.get(BACKUP_RETENTION_OPTION)
    if days is None:
        days = read_attr(target, "backup_retention_days")
    if days is None:
        return False
    plan.env(f"{prefix}_BACKUP_RETENTION_DAYS", days)
    return True


def emit_audit_logging(plan: BindingPlan, binding: ComponentBinding, *, prefix: str) -> None:
    plan.env(f"{prefix}_AUDIT_LOGGING_ENABLED", True)
    plan.env(f"{prefix}_AUDIT_SOURCE", binding.from_)


def apply_secure_mode(
    plan: BindingPlan,
    target: Any,
    binding: ComponentBinding,
    context: BindingContext,
    *,
    prefix: str,
    scope: str,
    key_fields: Sequence[str] = DEFAULT_KEY_FIELDS,
    encryption: bool = True,
    network: bool = True,
) -> None:
    """
    Executa a passada completa de secure mode, se algum toggle estiver ligado.

    Recursos ausentes no alvo são pulados e registrados como eventos DEBUG.
    """
    if not secure_mode_enabled(binding):
        return

    if encryption and not emit_encryption(plan, target, prefix=prefix, key_fields=key_fields):
        context.log(scope=scope, level="DEBUG", message="secure mode: target declares no encryption key")

    if network and not emit_network_placement(plan, target, prefix=prefix):
        context.log(scope=scope, level="DEBUG", message="secure mode: target declares no network placement")

    if not emit_backup_retention(plan, target, binding, prefix=prefix):
        context.log(scope=scope, level="DEBUG", message="secure mode: no backup retention declared")

    emit_audit_logging(plan, binding, prefix=prefix)
