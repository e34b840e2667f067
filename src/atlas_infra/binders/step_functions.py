# src/atlas_infra/binders/step_functions.py
"""
Estratégia de binding para AWS Step Functions.

Capabilities:
    - stepfunctions:state-machine → iniciar e gerir execuções
    - stepfunctions:activity      → worker de activity (poll + callbacks)
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


_ACTIVITY_WORKER = (
    "states:GetActivityTask",
    "states:SendTaskSuccess",
    "states:SendTaskFailure",
    "states:SendTaskHeartbeat",
)


class StepFunctionsBinderStrategy:
    service_type = "step-functions"
    category = "Orchestration"
    accepted_access = frozenset({"read", "write", "admin", "execute"})
    shapes = {
        "stepfunctions:state-machine": TargetShape(("state_machine_arn", "state_machine_name")),
        "stepfunctions:activity": TargetShape(("activity_arn", "activity_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use express workflows for high-volume short executions",
        "Enable execution logging to CloudWatch Logs",
        "Enable X-Ray tracing for state machines",
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

        if binding.capability == "stepfunctions:state-machine":
            arn = read_attr(target, "state_machine_arn")
            if binding.has_access("read"):
                plan.grant(("states:DescribeStateMachine", "states:ListExecutions"), arn)
            if binding.has_access("execute"):
                plan.grant(("states:StartExecution", "states:StartSyncExecution"), arn)
            if binding.has_access("write"):
                plan.grant(("states:UpdateStateMachine", "states:TagResource", "states:UntagResource"), arn)
            if binding.has_access("admin"):
                plan.grant(("states:DeleteStateMachine",), arn)
            plan.env("STEP_FUNCTIONS_STATE_MACHINE_ARN", arn)
            plan.env("STEP_FUNCTIONS_STATE_MACHINE_NAME", read_attr(target, "state_machine_name"))
            plan.env("STEP_FUNCTIONS_STATE_MACHINE_TYPE", read_attr(target, "state_machine_type"))
        else:
            arn = read_attr(target, "activity_arn")
            if binding.has_access("read"):
                plan.grant(("states:DescribeActivity",), arn)
            if binding.has_access("write", "execute"):
                plan.grant(_ACTIVITY_WORKER, arn)
            if binding.has_access("admin"):
                plan.grant(("states:DeleteActivity",), arn)
            plan.env("STEP_FUNCTIONS_ACTIVITY_ARN", arn)
            plan.env("STEP_FUNCTIONS_ACTIVITY_NAME", read_attr(target, "activity_name"))

        apply_secure_mode(
            plan,
            target,
            binding,
            context,
            prefix="STEP_FUNCTIONS",
            scope=f"binding.{self.service_type}",
        )
        commit_binding(plan, source, binding, context, service_type=self.service_type)
