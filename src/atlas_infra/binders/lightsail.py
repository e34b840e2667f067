# src/atlas_infra/binders/lightsail.py
"""
Estratégia de binding para Amazon Lightsail.

Capabilities:
    - lightsail:instance          → instância virtual
    - lightsail:database          → banco relacional gerenciado
    - lightsail:load-balancer     → load balancer
    - lightsail:container-service → serviço de containers
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


# (read, write, admin) por capability
_ACTIONS = {
    "lightsail:instance": (
        ("lightsail:GetInstance", "lightsail:GetInstanceState", "lightsail:GetInstanceMetricData"),
        ("lightsail:StartInstance", "lightsail:StopInstance", "lightsail:RebootInstance"),
        ("lightsail:DeleteInstance", "lightsail:TagResource"),
    ),
    "lightsail:database": (
        ("lightsail:GetRelationalDatabase", "lightsail:GetRelationalDatabaseMetricData"),
        ("lightsail:UpdateRelationalDatabase", "lightsail:RebootRelationalDatabase"),
        ("lightsail:DeleteRelationalDatabase", "lightsail:TagResource"),
    ),
    "lightsail:load-balancer": (
        ("lightsail:GetLoadBalancer", "lightsail:GetLoadBalancerMetricData"),
        ("lightsail:AttachInstancesToLoadBalancer", "lightsail:DetachInstancesFromLoadBalancer"),
        ("lightsail:DeleteLoadBalancer", "lightsail:TagResource"),
    ),
    "lightsail:container-service": (
        ("lightsail:GetContainerServices", "lightsail:GetContainerLog"),
        ("lightsail:CreateContainerServiceDeployment", "lightsail:UpdateContainerService"),
        ("lightsail:DeleteContainerService", "lightsail:TagResource"),
    ),
}


class LightsailBinderStrategy:
    service_type = "lightsail"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "lightsail:instance": TargetShape(("instance_arn", "instance_name")),
        "lightsail:database": TargetShape(("database_arn", "database_name")),
        "lightsail:load-balancer": TargetShape(("load_balancer_arn", "load_balancer_name")),
        "lightsail:container-service": TargetShape(("container_service_arn", "container_service_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use static IPs for instances that serve public traffic",
        "Enable automatic snapshots for instances and databases",
        "Move to EC2 or ECS when workloads outgrow Lightsail bundles",
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

        capability = binding.capability
        primary = self.shapes[capability].primary
        resource_arn = read_attr(target, primary)
        read, write, admin = _ACTIONS[capability]
        for mode, actions in (("read", read), ("write", write), ("admin", admin)):
            if binding.has_access(mode):
                plan.grant(actions, resource_arn)

        if capability == "lightsail:instance":
            plan.env("LIGHTSAIL_INSTANCE_NAME", read_attr(target, "instance_name"))
            plan.env("LIGHTSAIL_INSTANCE_ARN", resource_arn)
            plan.env("LIGHTSAIL_PUBLIC_IP", read_attr(target, "public_ip_address"))
            plan.env("LIGHTSAIL_PRIVATE_IP", read_attr(target, "private_ip_address"))
        elif capability == "lightsail:database":
            if binding.has_access("read") and has_attr(target, "master_username"):
                plan.grant(("lightsail:GetRelationalDatabaseMasterUserPassword",), resource_arn)
            plan.env("LIGHTSAIL_DATABASE_NAME", read_attr(target, "database_name"))
            plan.env("LIGHTSAIL_DATABASE_ARN", resource_arn)
            plan.env("LIGHTSAIL_DATABASE_ENDPOINT", read_attr(target, "endpoint"))
            plan.env("LIGHTSAIL_DATABASE_PORT", read_attr(target, "port"))
            plan.env("LIGHTSAIL_DATABASE_MASTER_USERNAME", read_attr(target, "master_username"))
        elif capability == "lightsail:load-balancer":
            plan.env("LIGHTSAIL_LOAD_BALANCER_NAME", read_attr(target, "load_balancer_name"))
            plan.env("LIGHTSAIL_LOAD_BALANCER_ARN", resource_arn)
            plan.env("LIGHTSAIL_LOAD_BALANCER_DNS", read_attr(target, "dns_name"))
        else:
            plan.env("LIGHTSAIL_CONTAINER_SERVICE_NAME", read_attr(target, "container_service_name"))
            plan.env("LIGHTSAIL_CONTAINER_SERVICE_ARN", resource_arn)
            plan.env("LIGHTSAIL_CONTAINER_SERVICE_URL", read_attr(target, "url"))

        apply_secure_mode(plan, target, binding, context, prefix="LIGHTSAIL", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
