# src/atlas_infra/binders/dynamodb.py
"""
Estratégia de binding para Amazon DynamoDB.

Capabilities:
    - dynamodb:table  → operações de item e gestão da tabela
    - dynamodb:index  → consultas em um índice secundário
    - dynamodb:stream → consumo do stream de alterações

Modos de acesso:
    - read    → leitura de itens (get, batch get, query, scan)
    - write   → escrita de itens (put, update, delete, batch write)
    - admin   → gestão da tabela (capacidade, TTL, tags)
    - backup  → backups sob demanda e point-in-time recovery
    - process → consumo do stream (quando o alvo declara `stream_arn`)

Secure mode, além da passada comum:
    - DYNAMODB_POINT_IN_TIME_RECOVERY quando o alvo declara PITR
    - DYNAMODB_REPLICA_REGIONS quando o alvo é uma global table
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
    secure_mode_enabled,
    seed_environment,
)


_ITEM_READ = (
    "dynamodb:GetItem",
    "dynamodb:BatchGetItem",
    "dynamodb:Query",
    "dynamodb:Scan",
    "dynamodb:ConditionCheckItem",
    "dynamodb:DescribeTable",
)
_ITEM_WRITE = (
    "dynamodb:PutItem",
    "dynamodb:UpdateItem",
    "dynamodb:DeleteItem",
    "dynamodb:BatchWriteItem",
)
_TABLE_ADMIN = (
    "dynamodb:UpdateTable",
    "dynamodb:UpdateTimeToLive",
    "dynamodb:DescribeTimeToLive",
    "dynamodb:TagResource",
    "dynamodb:UntagResource",
)
_BACKUP = (
    "dynamodb:CreateBackup",
    "dynamodb:DescribeContinuousBackups",
    "dynamodb:UpdateContinuousBackups",
    "dynamodb:RestoreTableToPointInTime",
)
_STREAM_READ = (
    "dynamodb:DescribeStream",
    "dynamodb:GetRecords",
    "dynamodb:GetShardIterator",
    "dynamodb:ListStreams",
)


class DynamoDbBinderStrategy:
    service_type = "dynamodb"
    category = "Database"
    accepted_access = frozenset({"read", "write", "admin", "backup", "process"})
    shapes = {
        "dynamodb:table": TargetShape(("table_arn", "table_name")),
        "dynamodb:index": TargetShape(("index_arn", "index_name", "table_name")),
        "dynamodb:stream": TargetShape(("stream_arn", "table_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Configure appropriate read/write capacity",
        "Set up global secondary indexes for query optimization",
        "Enable point-in-time recovery for production tables",
        "Use DynamoDB streams for change data capture",
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
            "dynamodb:table": self._bind_table,
            "dynamodb:index": self._bind_index,
            "dynamodb:stream": self._bind_stream,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="DYNAMODB", scope=f"binding.{self.service_type}")
        if secure_mode_enabled(binding):
            if read_attr(target, "point_in_time_recovery") is True:
                plan.env("DYNAMODB_POINT_IN_TIME_RECOVERY", True)
            plan.env("DYNAMODB_REPLICA_REGIONS", read_attr(target, "replica_regions"))

        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_table(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        table_arn = read_attr(target, "table_arn")

        if binding.has_access("read"):
            plan.grant(_ITEM_READ, table_arn)
        if binding.has_access("write"):
            plan.grant(_ITEM_WRITE, table_arn)
        if binding.has_access("admin"):
            plan.grant(_TABLE_ADMIN, table_arn)
        if binding.has_access("backup"):
            plan.grant(_BACKUP, table_arn)
        if binding.has_access("process") and has_attr(target, "stream_arn"):
            plan.grant(_STREAM_READ, read_attr(target, "stream_arn"))
            plan.env("DYNAMODB_STREAM_ARN", read_attr(target, "stream_arn"))

        plan.env("DYNAMODB_TABLE_NAME", read_attr(target, "table_name"))
        plan.env("DYNAMODB_TABLE_ARN", table_arn)

    def _bind_index(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        index_arn = read_attr(target, "index_arn")

        if binding.has_access("read"):
            plan.grant(("dynamodb:Query", "dynamodb:Scan"), index_arn)
        if binding.has_access("admin") and has_attr(target, "table_arn"):
            # índices são criados/removidos via UpdateTable na tabela dona
            plan.grant(("dynamodb:UpdateTable", "dynamodb:DescribeTable"), read_attr(target, "table_arn"))

        plan.env("DYNAMODB_TABLE_NAME", read_attr(target, "table_name"))
        plan.env("DYNAMODB_INDEX_NAME", read_attr(target, "index_name"))
        plan.env("DYNAMODB_INDEX_ARN", index_arn)

    def _bind_stream(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        stream_arn = read_attr(target, "stream_arn")

        if binding.has_access("read", "process"):
            plan.grant(_STREAM_READ, stream_arn)

        plan.env("DYNAMODB_TABLE_NAME", read_attr(target, "table_name"))
        plan.env("DYNAMODB_STREAM_ARN", stream_arn)
        plan.env("DYNAMODB_STREAM_VIEW_TYPE", read_attr(target, "stream_view_type"))
