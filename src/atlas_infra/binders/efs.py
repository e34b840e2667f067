# src/atlas_infra/binders/efs.py
"""
Estratégia de binding para Amazon EFS.

Capabilities:
    - efs:file-system  → montagem direta do file system
    - efs:access-point → montagem via access point
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


class EfsBinderStrategy:
    service_type = "efs"
    category = "Storage"
    accepted_access = frozenset({"read", "write", "admin", "backup"})
    shapes = {
        "efs:file-system": TargetShape(("file_system_arn", "file_system_id")),
        "efs:access-point": TargetShape(("access_point_arn", "access_point_id", "file_system_id")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Mount through access points to enforce POSIX identity",
        "Enable encryption at rest and in transit",
        "Configure lifecycle policies to move cold data to infrequent access",
        "Enable automatic backups",
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

        if binding.capability == "efs:file-system":
            resource = read_attr(target, "file_system_arn")
            admin = ("elasticfilesystem:ClientRootAccess", "elasticfilesystem:ModifyMountTargetSecurityGroups")
        else:
            resource = read_attr(target, "access_point_arn")
            admin = ("elasticfilesystem:ClientRootAccess", "elasticfilesystem:DeleteAccessPoint")

        if binding.has_access("read"):
            plan.grant(
                (
                    "elasticfilesystem:ClientMount",
                    "elasticfilesystem:DescribeFileSystems",
                    "elasticfilesystem:DescribeMountTargets",
                    "elasticfilesystem:DescribeAccessPoints",
                ),
                resource,
            )
        if binding.has_access("write"):
            plan.grant(("elasticfilesystem:ClientWrite",), resource)
        if binding.has_access("admin"):
            plan.grant(admin + ("elasticfilesystem:TagResource",), resource)
        if binding.has_access("backup"):
            plan.grant(
                (
                    "elasticfilesystem:Backup",
                    "elasticfilesystem:DescribeBackupPolicy",
                    "elasticfilesystem:PutBackupPolicy",
                ),
                resource,
            )

        plan.env("EFS_FILE_SYSTEM_ID", read_attr(target, "file_system_id"))
        if binding.capability == "efs:file-system":
            plan.env("EFS_FILE_SYSTEM_ARN", resource)
            plan.env("EFS_DNS_NAME", read_attr(target, "dns_name"))
            plan.env("EFS_PERFORMANCE_MODE", read_attr(target, "performance_mode"))
            plan.env("EFS_THROUGHPUT_MODE", read_attr(target, "throughput_mode"))
        else:
            plan.env("EFS_ACCESS_POINT_ID", read_attr(target, "access_point_id"))
            plan.env("EFS_ACCESS_POINT_ARN", resource)
            plan.env("EFS_ACCESS_POINT_PATH", read_attr(target, "root_directory_path"))

        apply_secure_mode(plan, target, binding, context, prefix="EFS", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
