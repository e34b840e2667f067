# src/atlas_infra/binders/ecs_fargate.py
"""
Estratégia de binding para ECS no Fargate.

Capabilities:
    - ecs:cluster         → cluster de orquestração
    - ecs:service         → serviço em execução no cluster
    - ecs:task-definition → definição de task (registro e execução)

O modo `execute` libera ECS Exec no cluster/serviço e, para uma task
definition, `RunTask`/`StartTask` junto com `iam:PassRole` nas roles de
execução e de task que o alvo declarar.
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


_EXEC_COMMAND = ("ecs:ExecuteCommand", "ecs:DescribeTasks")


class EcsFargateBinderStrategy:
    service_type = "ecs-fargate"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin", "execute"})
    shapes = {
        "ecs:cluster": TargetShape(("cluster_arn", "cluster_name")),
        "ecs:service": TargetShape(("service_arn", "service_name", "cluster_arn")),
        "ecs:task-definition": TargetShape(("task_definition_arn", "family")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Bind to ECS cluster for container orchestration",
        "Configure IAM roles for task execution",
        "Use service discovery for inter-service communication",
        "Enable container insights for monitoring",
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
            "ecs:cluster": self._bind_cluster,
            "ecs:service": self._bind_service,
            "ecs:task-definition": self._bind_task_definition,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="ECS", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_cluster(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        cluster_arn = read_attr(target, "cluster_arn")

        if binding.has_access("read"):
            plan.grant(("ecs:DescribeClusters", "ecs:ListServices", "ecs:ListTasks"), cluster_arn)
        if binding.has_access("write"):
            plan.grant(("ecs:UpdateCluster", "ecs:PutClusterCapacityProviders"), cluster_arn)
        if binding.has_access("admin"):
            plan.grant(("ecs:DeleteCluster", "ecs:TagResource", "ecs:UntagResource"), cluster_arn)
        if binding.has_access("execute"):
            plan.grant(_EXEC_COMMAND, cluster_arn)

        plan.env("ECS_CLUSTER_NAME", read_attr(target, "cluster_name"))
        plan.env("ECS_CLUSTER_ARN", cluster_arn)

    def _bind_service(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        service_arn = read_attr(target, "service_arn")
        cluster_arn = read_attr(target, "cluster_arn")

        if binding.has_access("read"):
            plan.grant(("ecs:DescribeServices", "ecs:ListTasks"), service_arn)
        if binding.has_access("write"):
            plan.grant(("ecs:UpdateService",), service_arn)
        if binding.has_access("admin"):
            plan.grant(("ecs:DeleteService", "ecs:TagResource", "ecs:UntagResource"), service_arn)
        if binding.has_access("execute"):
            plan.grant(_EXEC_COMMAND, cluster_arn)

        plan.env("ECS_CLUSTER_ARN", cluster_arn)
        plan.env("ECS_SERVICE_NAME", read_attr(target, "service_name"))
        plan.env("ECS_SERVICE_ARN", service_arn)
        plan.env("ECS_SERVICE_ENDPOINT", read_attr(target, "service_endpoint"))
        plan.env("ECS_SERVICE_DESIRED_COUNT", read_attr(target, "desired_count"))

    def _bind_task_definition(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        task_definition_arn = read_attr(target, "task_definition_arn")

        if binding.has_access("read"):
            plan.grant(("ecs:DescribeTaskDefinition",), task_definition_arn)
        if binding.has_access("write"):
            plan.grant(("ecs:RegisterTaskDefinition", "ecs:TagResource"), task_definition_arn)
        if binding.has_access("admin"):
            plan.grant(("ecs:DeregisterTaskDefinition", "ecs:DeleteTaskDefinitions"), task_definition_arn)
        if binding.has_access("execute"):
            plan.grant(("ecs:RunTask", "ecs:StartTask"), task_definition_arn)
            for role_field in ("execution_role_arn", "task_role_arn"):
                if has_attr(target, role_field):
                    plan.grant(("iam:PassRole",), read_attr(target, role_field))

        plan.env("ECS_TASK_DEFINITION_ARN", task_definition_arn)
        plan.env("ECS_TASK_DEFINITION_FAMILY", read_attr(target, "family"))
