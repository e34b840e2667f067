# src/atlas_infra/binders/kinesis.py
"""
Estratégia de binding para Amazon Kinesis Data Streams.

Capabilities:
    - kinesis:stream   → produção, consumo e gestão de um stream
    - kinesis:consumer → consumidor com enhanced fan-out registrado

O modo `process` cobre o registro e a leitura via consumidores
(enhanced fan-out); `read` cobre a leitura por shard iterator.
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


_STREAM_READ = (
    "kinesis:DescribeStream",
    "kinesis:DescribeStreamSummary",
    "kinesis:GetRecords",
    "kinesis:GetShardIterator",
    "kinesis:ListShards",
)


class KinesisBinderStrategy:
    service_type = "kinesis"
    category = "Analytics"
    accepted_access = frozenset({"read", "write", "admin", "process"})
    shapes = {
        "kinesis:stream": TargetShape(("stream_arn", "stream_name")),
        "kinesis:consumer": TargetShape(("consumer_arn", "consumer_name", "stream_arn")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use on-demand capacity mode for unpredictable traffic",
        "Enable server-side encryption with KMS",
        "Use enhanced fan-out for low-latency consumers",
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

        stream_arn = read_attr(target, "stream_arn")

        if binding.capability == "kinesis:stream":
            if binding.has_access("read"):
                plan.grant(_STREAM_READ, stream_arn)
            if binding.has_access("write"):
                plan.grant(("kinesis:PutRecord", "kinesis:PutRecords"), stream_arn)
            if binding.has_access("admin"):
                plan.grant(
                    (
                        "kinesis:UpdateShardCount",
                        "kinesis:IncreaseStreamRetentionPeriod",
                        "kinesis:DecreaseStreamRetentionPeriod",
                        "kinesis:AddTagsToStream",
                        "kinesis:RemoveTagsFromStream",
                    ),
                    stream_arn,
                )
            if binding.has_access("process"):
                plan.grant(
                    (
                        "kinesis:RegisterStreamConsumer",
                        "kinesis:DescribeStreamConsumer",
                        "kinesis:ListStreamConsumers",
                    ),
                    stream_arn,
                )
            plan.env("KINESIS_STREAM_NAME", read_attr(target, "stream_name"))
            plan.env("KINESIS_STREAM_ARN", stream_arn)
            plan.env("KINESIS_SHARD_COUNT", read_attr(target, "shard_count"))
            plan.env("KINESIS_RETENTION_PERIOD", read_attr(target, "retention_period_hours"))
            plan.env("KINESIS_STREAM_MODE", read_attr(target, "stream_mode"))
        else:
            consumer_arn = read_attr(target, "consumer_arn")
            if binding.has_access("read", "process"):
                plan.grant(("kinesis:SubscribeToShard", "kinesis:DescribeStreamConsumer"), consumer_arn)
                plan.grant(("kinesis:DescribeStreamSummary", "kinesis:ListShards"), stream_arn)
            if binding.has_access("admin"):
                plan.grant(("kinesis:DeregisterStreamConsumer",), consumer_arn)
            plan.env("KINESIS_STREAM_ARN", stream_arn)
            plan.env("KINESIS_CONSUMER_NAME", read_attr(target, "consumer_name"))
            plan.env("KINESIS_CONSUMER_ARN", consumer_arn)

        apply_secure_mode(plan, target, binding, context, prefix="KINESIS", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
