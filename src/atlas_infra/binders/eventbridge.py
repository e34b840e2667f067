# src/atlas_infra/binders/eventbridge.py
"""
Estratégia de binding para Amazon EventBridge.

Capabilities:
    - eventbridge:event-bus → publicação e gestão de um barramento
    - eventbridge:rule      → leitura, gestão e disparo de uma regra

Uma regra só recebe permissão de publicação (`publish`/`invoke`) quando
declara o ARN do barramento ao qual pertence.
"""

from __future__ import annotations

import json
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


class EventBridgeBinderStrategy:
    service_type = "eventbridge"
    category = "Messaging"
    accepted_access = frozenset({"read", "write", "admin", "publish", "invoke"})
    shapes = {
        "eventbridge:event-bus": TargetShape(("event_bus_arn", "event_bus_name")),
        "eventbridge:rule": TargetShape(("rule_arn", "rule_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use dedicated event buses per domain",
        "Define narrow event patterns on rules",
        "Configure dead-letter queues on rule targets",
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

        if binding.capability == "eventbridge:event-bus":
            self._bind_event_bus(plan, target, binding)
        else:
            self._bind_rule(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="EVENTBRIDGE", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_event_bus(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        bus_arn = read_attr(target, "event_bus_arn")

        if binding.has_access("read"):
            plan.grant(("events:DescribeEventBus", "events:ListRules"), bus_arn)
        if binding.has_access("write", "publish", "invoke"):
            plan.grant(("events:PutEvents",), bus_arn)
        if binding.has_access("admin"):
            plan.grant(("events:PutPermission", "events:RemovePermission", "events:DeleteEventBus"), bus_arn)

        plan.env("EVENTBRIDGE_EVENT_BUS_NAME", read_attr(target, "event_bus_name"))
        plan.env("EVENTBRIDGE_EVENT_BUS_ARN", bus_arn)

    def _bind_rule(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        rule_arn = read_attr(target, "rule_arn")

        if binding.has_access("read"):
            plan.grant(("events:DescribeRule", "events:ListTargetsByRule"), rule_arn)
        if binding.has_access("write"):
            plan.grant(("events:PutRule", "events:PutTargets", "events:RemoveTargets"), rule_arn)
        if binding.has_access("admin"):
            plan.grant(("events:EnableRule", "events:DisableRule", "events:DeleteRule"), rule_arn)
        if binding.has_access("publish", "invoke") and has_attr(target, "event_bus_arn"):
            plan.grant(("events:PutEvents",), read_attr(target, "event_bus_arn"))
            plan.env("EVENTBRIDGE_EVENT_BUS_ARN", read_attr(target, "event_bus_arn"))

        plan.env("EVENTBRIDGE_RULE_NAME", read_attr(target, "rule_name"))
        plan.env("EVENTBRIDGE_RULE_ARN", rule_arn)
        plan.env("EVENTBRIDGE_RULE_STATE", read_attr(target, "state"))
        pattern = read_attr(target, "event_pattern")
        if isinstance(pattern, (dict, list)):
            pattern = json.dumps(pattern, sort_keys=True)
        plan.env("EVENTBRIDGE_EVENT_PATTERN", pattern)
