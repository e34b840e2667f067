# src/atlas_infra/binders/eks.py
"""
Estratégia de binding para clusters Amazon EKS.

Capabilities:
    - eks:cluster         → acesso ao control plane do cluster
    - eks:nodegroup       → gestão de um managed node group
    - eks:fargate-profile → gestão de um perfil Fargate

Decisões arquiteturais:
    - Toda permissão é escopada ao ARN concreto do recurso alvo
    - Metadados opcionais do cluster (endpoint, versão, status, OIDC)
      só viram ambiente quando o alvo os declara
    - Posicionamento de rede (VPC, subnets, security groups) é emitido
      apenas pela passada de secure mode
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


class EksBinderStrategy:
    service_type = "eks"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "eks:cluster": TargetShape(("cluster_arn", "cluster_name")),
        "eks:nodegroup": TargetShape(("nodegroup_arn", "nodegroup_name", "cluster_name")),
        "eks:fargate-profile": TargetShape(("fargate_profile_arn", "fargate_profile_name", "cluster_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use IAM roles for service accounts instead of node roles",
        "Enable control plane logging for audit",
        "Restrict public access to the cluster endpoint",
        "Enable envelope encryption of Kubernetes secrets",
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
            "eks:cluster": self._bind_cluster,
            "eks:nodegroup": self._bind_nodegroup,
            "eks:fargate-profile": self._bind_fargate_profile,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="EKS", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_cluster(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        cluster_arn = read_attr(target, "cluster_arn")

        if binding.has_access("read"):
            plan.grant(
                (
                    "eks:DescribeCluster",
                    "eks:ListNodegroups",
                    "eks:ListFargateProfiles",
                    "eks:ListUpdates",
                    "eks:DescribeUpdate",
                ),
                cluster_arn,
            )
        if binding.has_access("write"):
            plan.grant(
                ("eks:UpdateClusterConfig", "eks:UpdateClusterVersion", "eks:TagResource", "eks:UntagResource"),
                cluster_arn,
            )
        if binding.has_access("admin"):
            plan.grant(
                (
                    "eks:CreateNodegroup",
                    "eks:DeleteNodegroup",
                    "eks:CreateFargateProfile",
                    "eks:DeleteFargateProfile",
                    "eks:AccessKubernetesApi",
                ),
                cluster_arn,
            )

        plan.env("EKS_CLUSTER_NAME", read_attr(target, "cluster_name"))
        plan.env("EKS_CLUSTER_ARN", cluster_arn)
        plan.env("EKS_CLUSTER_ENDPOINT", read_attr(target, "endpoint"))
        plan.env("EKS_CLUSTER_VERSION", read_attr(target, "version"))
        plan.env("EKS_CLUSTER_STATUS", read_attr(target, "status"))
        plan.env("EKS_OIDC_ISSUER", read_attr(target, "oidc_issuer"))

    def _bind_nodegroup(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        nodegroup_arn = read_attr(target, "nodegroup_arn")

        if binding.has_access("read"):
            plan.grant(("eks:DescribeNodegroup",), nodegroup_arn)
        if binding.has_access("write"):
            plan.grant(("eks:UpdateNodegroupConfig", "eks:UpdateNodegroupVersion"), nodegroup_arn)
        if binding.has_access("admin"):
            plan.grant(("eks:DeleteNodegroup", "eks:TagResource", "eks:UntagResource"), nodegroup_arn)

        plan.env("EKS_CLUSTER_NAME", read_attr(target, "cluster_name"))
        plan.env("EKS_NODEGROUP_NAME", read_attr(target, "nodegroup_name"))
        plan.env("EKS_NODEGROUP_ARN", nodegroup_arn)
        plan.env("EKS_NODEGROUP_MIN_SIZE", read_attr(target, "scaling_config.min_size"))
        plan.env("EKS_NODEGROUP_MAX_SIZE", read_attr(target, "scaling_config.max_size"))
        plan.env("EKS_NODEGROUP_DESIRED_SIZE", read_attr(target, "scaling_config.desired_size"))
        plan.env("EKS_NODEGROUP_INSTANCE_TYPES", read_attr(target, "instance_types"))

    def _bind_fargate_profile(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        profile_arn = read_attr(target, "fargate_profile_arn")

        if binding.has_access("read"):
            plan.grant(("eks:DescribeFargateProfile",), profile_arn)
        if binding.has_access("write"):
            plan.grant(("eks:TagResource", "eks:UntagResource"), profile_arn)
        if binding.has_access("admin"):
            plan.grant(("eks:DeleteFargateProfile",), profile_arn)

        plan.env("EKS_CLUSTER_NAME", read_attr(target, "cluster_name"))
        plan.env("EKS_FARGATE_PROFILE_NAME", read_attr(target, "fargate_profile_name"))
        plan.env("EKS_FARGATE_PROFILE_ARN", profile_arn)
        plan.env("EKS_POD_EXECUTION_ROLE_ARN", read_attr(target, "pod_execution_role_arn"))
