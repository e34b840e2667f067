# src/atlas_infra/binders/emr.py
"""
Estratégia de binding para Amazon EMR.

Capabilities:
    - emr:cluster → cluster EMR (steps e inspeção)
    - emr:studio  → EMR Studio
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


class EmrBinderStrategy:
    service_type = "emr"
    category = "Analytics"
    accepted_access = frozenset({"read", "write", "admin", "execute"})
    shapes = {
        "emr:cluster": TargetShape(("cluster_arn", "cluster_id")),
        "emr:studio": TargetShape(("studio_arn", "studio_id")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Run clusters in private subnets with a security configuration",
        "Use auto-termination for transient clusters",
        "Store logs and step output in S3 with encryption",
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

        if binding.capability == "emr:cluster":
            cluster_arn = read_attr(target, "cluster_arn")
            if binding.has_access("read"):
                plan.grant(
                    (
                        "elasticmapreduce:DescribeCluster",
                        "elasticmapreduce:ListSteps",
                        "elasticmapreduce:DescribeStep",
                        "elasticmapreduce:ListInstances",
                    ),
                    cluster_arn,
                )
            if binding.has_access("write", "execute"):
                plan.grant(("elasticmapreduce:AddJobFlowSteps", "elasticmapreduce:CancelSteps"), cluster_arn)
            if binding.has_access("admin"):
                plan.grant(
                    (
                        "elasticmapreduce:ModifyInstanceGroups",
                        "elasticmapreduce:SetTerminationProtection",
                        "elasticmapreduce:TerminateJobFlows",
                    ),
                    cluster_arn,
                )
            if binding.has_access("execute") and has_attr(target, "service_role_arn"):
                plan.grant(("iam:PassRole",), read_attr(target, "service_role_arn"))
            plan.env("EMR_CLUSTER_ID", read_attr(target, "cluster_id"))
            plan.env("EMR_CLUSTER_ARN", cluster_arn)
            plan.env("EMR_MASTER_DNS", read_attr(target, "master_public_dns_name"))
            plan.env("EMR_RELEASE_LABEL", read_attr(target, "release_label"))
        else:
            studio_arn = read_attr(target, "studio_arn")
            if binding.has_access("read"):
                plan.grant(("elasticmapreduce:DescribeStudio", "elasticmapreduce:ListStudioSessionMappings"), studio_arn)
            if binding.has_access("write", "execute"):
                plan.grant(("elasticmapreduce:CreateStudioPresignedUrl",), studio_arn)
            if binding.has_access("admin"):
                plan.grant(("elasticmapreduce:UpdateStudio", "elasticmapreduce:DeleteStudio"), studio_arn)
            plan.env("EMR_STUDIO_ID", read_attr(target, "studio_id"))
            plan.env("EMR_STUDIO_ARN", studio_arn)
            plan.env("EMR_STUDIO_URL", read_attr(target, "url"))

        apply_secure_mode(plan, target, binding, context, prefix="EMR", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
