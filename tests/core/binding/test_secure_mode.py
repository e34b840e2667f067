# tests/core/binding/test_secure_mode.py
"""
Testes da passada de secure mode compartilhada pelas estratégias.

Os testes asseguram que:
- sem toggle ligado nada é emitido
- cada ramo depende da presença concreta de um atributo do alvo ou option
- recursos ausentes são pulados com eventos DEBUG, nunca com erro
- audit logging é sempre emitido com secure mode ligado
"""

import pytest

try:
    from atlas_infra.core.binding.plan import BindingPlan
    from atlas_infra.core.binding.secure import (
        KMS_DATA_ACTIONS,
        apply_secure_mode,
        secure_mode_enabled,
    )
except Exception as e:  # noqa: BLE001
    BindingPlan = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing secure mode module. Implement:\n"
            "- src/atlas_infra/core/binding/secure.py (apply_secure_mode)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "options,expected",
    [
        ({}, False),
        ({"requireSecureAccess": True}, True),
        ({"requireSecureNetworking": True}, True),
        ({"enableEncryption": True}, True),
        ({"requireSecureAccess": "true"}, False),
        ({"requireSecureAccess": False, "somethingElse": True}, False),
    ],
)
def test_secure_mode_toggles(make_binding, options, expected):
    _require_imports()
    assert secure_mode_enabled(make_binding("sqs:queue", ["read"], options=options)) is expected


def test_disabled_secure_mode_emits_nothing(make_binding, binding_context):
    _require_imports()
    plan = BindingPlan()
    target = {"kms_key_arn": "arn:aws:kms:us-east-1:123456789012:key/k", "vpc_id": "vpc-1"}
    apply_secure_mode(plan, target, make_binding("sqs:queue", ["read"]), binding_context, prefix="SQS", scope="s")
    assert plan.empty
    assert binding_context.events == []


def test_full_secure_pass(make_binding, binding_context):
    """
    Verifica a passada completa com todos os recursos declarados no alvo.

    Invariantes:
        - A permissão KMS é escopada à chave lida do alvo
        - Apenas campos de rede declarados viram entradas
        - A retenção de backup da option vence a do alvo
    """
    _require_imports()
    key = "arn:aws:kms:us-east-1:123456789012:key/k"
    target = {
        "kms_key_arn": key,
        "vpc_id": "vpc-1",
        "subnet_ids": ["subnet-a", "subnet-b"],
        "backup_retention_days": 7,
    }
    binding = make_binding("sqs:queue", ["read"], from_="worker", options={"requireSecureAccess": True, "backupRetentionDays": 35})
    plan = BindingPlan()

    apply_secure_mode(plan, target, binding, binding_context, prefix="SQS", scope="binding.sqs")

    env = dict(plan.environment)
    assert env == {
        "SQS_KMS_KEY_ID": key,
        "SQS_VPC_ID": "vpc-1",
        "SQS_SUBNET_IDS": "subnet-a,subnet-b",
        "SQS_BACKUP_RETENTION_DAYS": "35",
        "SQS_AUDIT_LOGGING_ENABLED": "true",
        "SQS_AUDIT_SOURCE": "worker",
    }
    assert [(s.actions, s.resources) for s in plan.statements] == [(KMS_DATA_ACTIONS, (key,))]
    assert binding_context.events == []


def test_absent_features_are_skipped_with_debug_events(make_binding, binding_context):
    _require_imports()
    binding = make_binding("sqs:queue", ["read"], options={"enableEncryption": True})
    plan = BindingPlan()

    apply_secure_mode(plan, {"queue_arn": "arn"}, binding, binding_context, prefix="SQS", scope="binding.sqs")

    assert dict(plan.environment) == {"SQS_AUDIT_LOGGING_ENABLED": "true", "SQS_AUDIT_SOURCE": "api"}
    assert plan.statements == []
    levels = [e["level"] for e in binding_context.events_for("binding.sqs")]
    assert levels == ["DEBUG", "DEBUG", "DEBUG"]


def test_encryption_and_network_can_be_disabled(make_binding, binding_context):
    _require_imports()
    target = {"kms_key_arn": "arn:key", "vpc_id": "vpc-1", "backup_retention_days": 7}
    binding = make_binding("kms:key", ["read"], options={"requireSecureAccess": True})
    plan = BindingPlan()

    apply_secure_mode(
        plan, target, binding, binding_context, prefix="KMS", scope="binding.kms", encryption=False, network=False
    )

    env = dict(plan.environment)
    assert "KMS_KMS_KEY_ID" not in env
    assert "KMS_VPC_ID" not in env
    assert env["KMS_BACKUP_RETENTION_DAYS"] == "7"
    assert plan.statements == []


def test_custom_key_fields(make_binding, binding_context):
    _require_imports()
    plan = BindingPlan()
    apply_secure_mode(
        plan,
        {"kms_master_key_id": "alias/orders"},
        make_binding("sqs:queue", ["read"], options={"enableEncryption": True}),
        binding_context,
        prefix="SQS",
        scope="binding.sqs",
        key_fields=("kms_key_arn", "kms_master_key_id"),
    )
    assert dict(plan.environment)["SQS_KMS_KEY_ID"] == "alias/orders"
    assert plan.statements[0].resources == ("alias/orders",)


def test_mapping_key_is_rejected_not_iterated(make_binding, binding_context):
    _require_imports()
    from atlas_infra.core.binding.errors import InvalidTargetAttributeError

    plan = BindingPlan()
    binding = make_binding("sqs:queue", ["read"], options={"requireSecureAccess": True})

    with pytest.raises(InvalidTargetAttributeError) as exc_info:
        apply_secure_mode(plan, {"kms_key_arn": {"id": "k"}}, binding, binding_context, prefix="SQS", scope="s")

    assert exc_info.value.field == "kms_key_arn"
    assert plan.statements == []
