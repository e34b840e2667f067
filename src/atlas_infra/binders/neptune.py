# src/atlas_infra/binders/neptune.py
"""
Estratégia de binding para Amazon Neptune.

Capabilities:
    - neptune:cluster  → cluster de banco de grafos
    - neptune:instance → instância do cluster
    - neptune:query    → conexão IAM para consultas (Gremlin/SPARQL)

`neptune:query` concede `neptune-db:*` de dados apenas sobre o
`cluster_resource_id` declarado pelo alvo, nunca sobre o cluster ARN.
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


class NeptuneBinderStrategy:
    service_type = "neptune"
    category = "Database"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "neptune:cluster": TargetShape(("cluster_arn", "cluster_identifier")),
        "neptune:instance": TargetShape(("instance_arn", "instance_identifier")),
        "neptune:query": TargetShape(("cluster_resource_arn", "endpoint")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Enable IAM database authentication",
        "Keep clusters in private subnets",
        "Enable encryption at rest and automated backups",
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

        if capability == "neptune:cluster":
            cluster_arn = read_attr(target, "cluster_arn")
            if binding.has_access("read"):
                plan.grant(("neptune:DescribeDBClusters", "neptune:ListTagsForResource"), cluster_arn)
            if binding.has_access("write"):
                plan.grant(("neptune:ModifyDBCluster", "neptune:AddTagsToResource"), cluster_arn)
            if binding.has_access("admin"):
                plan.grant(("neptune:DeleteDBCluster", "neptune:FailoverDBCluster"), cluster_arn)
            plan.env("NEPTUNE_CLUSTER_IDENTIFIER", read_attr(target, "cluster_identifier"))
            plan.env("NEPTUNE_CLUSTER_ARN", cluster_arn)
            plan.env("NEPTUNE_ENDPOINT", read_attr(target, "endpoint"))
            plan.env("NEPTUNE_READER_ENDPOINT", read_attr(target, "reader_endpoint"))
            plan.env("NEPTUNE_PORT", read_attr(target, "port"))
            plan.env("NEPTUNE_ENGINE", read_attr(target, "engine"))
            plan.env("NEPTUNE_ENGINE_VERSION", read_attr(target, "engine_version"))
            plan.env("NEPTUNE_STATUS", read_attr(target, "status"))
        elif capability == "neptune:instance":
            instance_arn = read_attr(target, "instance_arn")
            if binding.has_access("read"):
                plan.grant(("neptune:DescribeDBInstances", "neptune:ListTagsForResource"), instance_arn)
            if binding.has_access("write"):
                plan.grant(("neptune:ModifyDBInstance", "neptune:RebootDBInstance"), instance_arn)
            if binding.has_access("admin"):
                plan.grant(("neptune:DeleteDBInstance",), instance_arn)
            plan.env("NEPTUNE_INSTANCE_IDENTIFIER", read_attr(target, "instance_identifier"))
            plan.env("NEPTUNE_INSTANCE_ARN", instance_arn)
            plan.env("NEPTUNE_VPC_SECURITY_GROUPS", read_attr(target, "vpc_security_groups"))
            plan.env("NEPTUNE_DB_SUBNET_GROUP", read_attr(target, "db_subnet_group_name"))
            plan.env("NEPTUNE_PARAMETER_GROUP", read_attr(target, "parameter_group_name"))
        else:
            resource_arn = read_attr(target, "cluster_resource_arn")
            if binding.has_access("read"):
                plan.grant(("neptune-db:connect", "neptune-db:ReadDataViaQuery"), resource_arn)
            if binding.has_access("write"):
                plan.grant(
                    ("neptune-db:connect", "neptune-db:WriteDataViaQuery", "neptune-db:DeleteDataViaQuery"),
                    resource_arn,
                )
            if binding.has_access("admin"):
                plan.grant(("neptune-db:ResetDatabase", "neptune-db:CancelQuery"), resource_arn)
            plan.env("NEPTUNE_QUERY_ENDPOINT", read_attr(target, "endpoint"))
            plan.env("NEPTUNE_QUERY_PORT", read_attr(target, "port"))

        apply_secure_mode(plan, target, binding, context, prefix="NEPTUNE", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
