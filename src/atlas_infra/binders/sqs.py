# src/atlas_infra/binders/sqs.py
"""
Estratégia de binding para filas Amazon SQS.

Capabilities:
    - sqs:queue             → fila principal (consumo e produção)
    - sqs:dead-letter-queue → DLQ associada (inspeção e redrive)

Modos de acesso:
    - read / poll / process → consumo (receive, delete, visibility)
    - write / send          → produção (send, send batch)
    - admin                 → gestão (atributos, purge, tags)

Contrato de ambiente:
    SQS_QUEUE_URL, SQS_QUEUE_ARN, SQS_QUEUE_NAME (quando declarado)
    SQS_DLQ_URL, SQS_DLQ_ARN, SQS_DLQ_MAX_RECEIVE_COUNT (quando declarado)
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


_CONSUME = (
    "sqs:ReceiveMessage",
    "sqs:DeleteMessage",
    "sqs:ChangeMessageVisibility",
    "sqs:GetQueueAttributes",
    "sqs:GetQueueUrl",
)
_PRODUCE = ("sqs:SendMessage", "sqs:GetQueueAttributes", "sqs:GetQueueUrl")
_ADMIN = (
    "sqs:SetQueueAttributes",
    "sqs:PurgeQueue",
    "sqs:TagQueue",
    "sqs:UntagQueue",
    "sqs:ListQueueTags",
)
_DLQ_REDRIVE = ("sqs:StartMessageMoveTask", "sqs:ListMessageMoveTasks", "sqs:CancelMessageMoveTask")


class SqsBinderStrategy:
    service_type = "sqs"
    category = "Messaging"
    accepted_access = frozenset({"read", "write", "admin", "poll", "send", "process"})
    shapes = {
        "sqs:queue": TargetShape(("queue_arn", "queue_url")),
        "sqs:dead-letter-queue": TargetShape(("dlq_arn", "dlq_url")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Configure a dead-letter queue for poison messages",
        "Set visibility timeout above the consumer processing time",
        "Enable server-side encryption with a customer managed key",
        "Use long polling to reduce empty receives",
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

        if binding.capability == "sqs:queue":
            self._bind_queue(plan, target, binding)
        else:
            self._bind_dead_letter_queue(plan, target, binding)

        apply_secure_mode(
            plan,
            target,
            binding,
            context,
            prefix="SQS",
            scope=f"binding.{self.service_type}",
            key_fields=("kms_key_arn", "kms_master_key_id", "kms_key_id"),
        )
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_queue(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        queue_arn = read_attr(target, "queue_arn")

        if binding.has_access("read", "poll", "process"):
            plan.grant(_CONSUME, queue_arn)
        if binding.has_access("write", "send"):
            plan.grant(_PRODUCE, queue_arn)
        if binding.has_access("admin"):
            plan.grant(_ADMIN, queue_arn)

        plan.env("SQS_QUEUE_URL", read_attr(target, "queue_url"))
        plan.env("SQS_QUEUE_ARN", queue_arn)
        plan.env("SQS_QUEUE_NAME", read_attr(target, "queue_name"))

    def _bind_dead_letter_queue(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        dlq_arn = read_attr(target, "dlq_arn")

        if binding.has_access("read", "poll", "process"):
            plan.grant(_CONSUME, dlq_arn)
        if binding.has_access("write", "send"):
            plan.grant(_PRODUCE, dlq_arn)
        if binding.has_access("admin"):
            plan.grant(_ADMIN + _DLQ_REDRIVE, dlq_arn)

        plan.env("SQS_DLQ_URL", read_attr(target, "dlq_url"))
        plan.env("SQS_DLQ_ARN", dlq_arn)
        plan.env("SQS_DLQ_MAX_RECEIVE_COUNT", read_attr(target, "max_receive_count"))
