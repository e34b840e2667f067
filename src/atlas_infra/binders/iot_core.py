# src/atlas_infra/binders/iot_core.py
"""
Estratégia de binding para AWS IoT Core.

Capabilities:
    - iot:thing → registro do dispositivo e seu device shadow
    - iot:topic → publicação e assinatura MQTT

Modos específicos:
    - shadow    → leitura/atualização do device shadow (apenas `iot:thing`)
    - publish   → `iot:Publish` no tópico
    - subscribe → `iot:Subscribe` no topic filter (ou no tópico, se o alvo
                  não declarar um filter) e `iot:Receive` no tópico
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


class IotCoreBinderStrategy:
    service_type = "iot-core"
    category = "IoT"
    accepted_access = frozenset({"read", "write", "admin", "publish", "subscribe", "shadow"})
    shapes = {
        "iot:thing": TargetShape(("thing_arn", "thing_name")),
        "iot:topic": TargetShape(("topic_arn", "topic_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use X.509 certificates per device",
        "Scope IoT policies to the client id of each thing",
        "Use device shadows for offline state synchronization",
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

        if binding.capability == "iot:thing":
            thing_arn = read_attr(target, "thing_arn")
            if binding.has_access("read"):
                plan.grant(("iot:DescribeThing", "iot:ListThingPrincipals"), thing_arn)
            if binding.has_access("write"):
                plan.grant(("iot:UpdateThing",), thing_arn)
            if binding.has_access("admin"):
                plan.grant(("iot:DeleteThing", "iot:AttachThingPrincipal", "iot:DetachThingPrincipal"), thing_arn)
            if binding.has_access("shadow"):
                plan.grant(("iot:GetThingShadow", "iot:UpdateThingShadow", "iot:DeleteThingShadow"), thing_arn)
            plan.env("IOT_THING_NAME", read_attr(target, "thing_name"))
            plan.env("IOT_THING_ARN", thing_arn)
            plan.env("IOT_THING_TYPE", read_attr(target, "thing_type"))
        else:
            topic_arn = read_attr(target, "topic_arn")
            if binding.has_access("read"):
                plan.grant(("iot:Receive", "iot:GetRetainedMessage"), topic_arn)
            if binding.has_access("write", "publish"):
                plan.grant(("iot:Publish",), topic_arn)
            if binding.has_access("subscribe"):
                plan.grant(("iot:Subscribe",), read_attr(target, "topic_filter_arn", topic_arn))
                plan.grant(("iot:Receive",), topic_arn)
            if binding.has_access("admin"):
                plan.grant(("iot:RetainPublish", "iot:DeleteRetainedMessage"), topic_arn)
            plan.env("IOT_TOPIC_NAME", read_attr(target, "topic_name"))
            plan.env("IOT_TOPIC_ARN", topic_arn)

        plan.env("IOT_ENDPOINT", read_attr(target, "endpoint"))

        apply_secure_mode(plan, target, binding, context, prefix="IOT", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
