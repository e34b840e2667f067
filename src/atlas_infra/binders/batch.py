# src/atlas_infra/binders/batch.py
"""
Estratégia de binding para AWS Batch.

Capabilities:
    - batch:job-queue           → fila de jobs (submissão e acompanhamento)
    - batch:compute-environment → ambiente de computação gerenciado
    - batch:job-definition      → definição de job registrada
    - batch:job                 → job individual já submetido

Quando o alvo expõe `instance_role_arn`, o modo `execute` também recebe
`iam:PassRole` nessa role; `ecs_cluster_arn` libera leitura do cluster
ECS subjacente ao ambiente de computação.
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


_JOB_CONTROL = ("batch:CancelJob", "batch:TerminateJob")


class BatchBinderStrategy:
    service_type = "batch"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin", "execute"})
    shapes = {
        "batch:job-queue": TargetShape(("job_queue_arn", "job_queue_name")),
        "batch:compute-environment": TargetShape(("compute_environment_arn", "compute_environment_name")),
        "batch:job-definition": TargetShape(("job_definition_arn", "job_definition_name")),
        "batch:job": TargetShape(("job_arn", "job_queue_arn")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use managed compute environments with Spot capacity for cost savings",
        "Set job timeouts and retry strategies on job definitions",
        "Run compute environments in private subnets",
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
            "batch:job-queue": self._bind_job_queue,
            "batch:compute-environment": self._bind_compute_environment,
            "batch:job-definition": self._bind_job_definition,
            "batch:job": self._bind_job,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="BATCH", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_job_queue(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        queue_arn = read_attr(target, "job_queue_arn")

        if binding.has_access("read"):
            plan.grant(("batch:DescribeJobQueues", "batch:ListJobs", "batch:DescribeJobs"), queue_arn)
        if binding.has_access("write", "execute"):
            plan.grant(("batch:SubmitJob",) + _JOB_CONTROL, queue_arn)
        if binding.has_access("admin"):
            plan.grant(("batch:UpdateJobQueue", "batch:DeleteJobQueue", "batch:TagResource"), queue_arn)

        plan.env("BATCH_JOB_QUEUE_NAME", read_attr(target, "job_queue_name"))
        plan.env("BATCH_JOB_QUEUE_ARN", queue_arn)
        plan.env("BATCH_JOB_QUEUE_PRIORITY", read_attr(target, "priority"))
        plan.env("BATCH_JOB_QUEUE_STATE", read_attr(target, "state"))

    def _bind_compute_environment(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        environment_arn = read_attr(target, "compute_environment_arn")

        if binding.has_access("read"):
            plan.grant(("batch:DescribeComputeEnvironments",), environment_arn)
            if has_attr(target, "ecs_cluster_arn"):
                plan.grant(("ecs:DescribeClusters", "ecs:ListContainerInstances"), read_attr(target, "ecs_cluster_arn"))
        if binding.has_access("write", "admin"):
            plan.grant(("batch:UpdateComputeEnvironment",), environment_arn)
        if binding.has_access("admin"):
            plan.grant(("batch:DeleteComputeEnvironment", "batch:TagResource"), environment_arn)
        if binding.has_access("execute") and has_attr(target, "instance_role_arn"):
            plan.grant(("iam:PassRole",), read_attr(target, "instance_role_arn"))

        plan.env("BATCH_COMPUTE_ENVIRONMENT_NAME", read_attr(target, "compute_environment_name"))
        plan.env("BATCH_COMPUTE_ENVIRONMENT_ARN", environment_arn)
        plan.env("BATCH_COMPUTE_ENVIRONMENT_TYPE", read_attr(target, "type"))
        plan.env("BATCH_ECS_CLUSTER_ARN", read_attr(target, "ecs_cluster_arn"))

    def _bind_job_definition(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        definition_arn = read_attr(target, "job_definition_arn")

        if binding.has_access("read"):
            plan.grant(("batch:DescribeJobDefinitions",), definition_arn)
        if binding.has_access("write", "execute"):
            plan.grant(("batch:SubmitJob",), definition_arn)
        if binding.has_access("admin"):
            plan.grant(("batch:RegisterJobDefinition", "batch:DeregisterJobDefinition"), definition_arn)
        if binding.has_access("execute") and has_attr(target, "job_role_arn"):
            plan.grant(("iam:PassRole",), read_attr(target, "job_role_arn"))

        plan.env("BATCH_JOB_DEFINITION_NAME", read_attr(target, "job_definition_name"))
        plan.env("BATCH_JOB_DEFINITION_ARN", definition_arn)
        plan.env("BATCH_JOB_DEFINITION_REVISION", read_attr(target, "revision"))

    def _bind_job(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        job_arn = read_attr(target, "job_arn")

        if binding.has_access("read"):
            plan.grant(("batch:DescribeJobs",), job_arn)
        if binding.has_access("write", "execute", "admin"):
            plan.grant(_JOB_CONTROL, job_arn)

        plan.env("BATCH_JOB_ARN", job_arn)
        plan.env("BATCH_JOB_QUEUE_ARN", read_attr(target, "job_queue_arn"))
        plan.env("BATCH_JOB_NAME", read_attr(target, "job_name"))
