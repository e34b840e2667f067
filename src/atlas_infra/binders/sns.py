# src/atlas_infra/binders/sns.py
"""
Estratégia de binding para tópicos Amazon SNS.

Capabilities:
    - sns:topic        → publicação e assinatura de um tópico
    - sns:subscription → gestão de uma assinatura existente
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


class SnsBinderStrategy:
    service_type = "sns"
    category = "Messaging"
    accepted_access = frozenset({"read", "write", "admin", "publish", "subscribe"})
    shapes = {
        "sns:topic": TargetShape(("topic_arn",)),
        "sns:subscription": TargetShape(("subscription_arn", "topic_arn")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use message filtering policies on subscriptions",
        "Configure a dead-letter queue for failed deliveries",
        "Enable server-side encryption for sensitive topics",
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

        topic_arn = read_attr(target, "topic_arn")

        if binding.capability == "sns:topic":
            if binding.has_access("read"):
                plan.grant(("sns:GetTopicAttributes", "sns:ListSubscriptionsByTopic"), topic_arn)
            if binding.has_access("write", "publish"):
                plan.grant(("sns:Publish",), topic_arn)
            if binding.has_access("subscribe"):
                plan.grant(("sns:Subscribe", "sns:Unsubscribe"), topic_arn)
            if binding.has_access("admin"):
                plan.grant(
                    (
                        "sns:SetTopicAttributes",
                        "sns:AddPermission",
                        "sns:RemovePermission",
                        "sns:TagResource",
                        "sns:DeleteTopic",
                    ),
                    topic_arn,
                )
            plan.env("SNS_TOPIC_ARN", topic_arn)
            plan.env("SNS_TOPIC_NAME", read_attr(target, "topic_name"))
            plan.env("SNS_FIFO_TOPIC", read_attr(target, "fifo_topic"))
        else:
            subscription_arn = read_attr(target, "subscription_arn")
            if binding.has_access("read"):
                plan.grant(("sns:GetSubscriptionAttributes",), subscription_arn)
            if binding.has_access("write", "subscribe"):
                plan.grant(("sns:Subscribe", "sns:ConfirmSubscription"), topic_arn)
            if binding.has_access("publish"):
                plan.grant(("sns:Publish",), topic_arn)
            if binding.has_access("admin"):
                plan.grant(("sns:SetSubscriptionAttributes", "sns:Unsubscribe"), subscription_arn)
            plan.env("SNS_SUBSCRIPTION_ARN", subscription_arn)
            plan.env("SNS_TOPIC_ARN", topic_arn)
            plan.env("SNS_SUBSCRIPTION_PROTOCOL", read_attr(target, "protocol"))

        apply_secure_mode(plan, target, binding, context, prefix="SNS", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
