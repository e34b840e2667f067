# src/atlas_infra/binders/vpc.py
"""
Estratégia de binding para redes Amazon VPC.

Capabilities:
    - vpc:network        → a VPC em si
    - vpc:subnet         → uma subnet (inclui criação de ENIs em `write`)
    - vpc:security-group → regras de um security group

O alvo já é o posicionamento de rede, portanto a passada de secure mode
não repete VPC/subnets/security groups no ambiente.
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


class VpcBinderStrategy:
    service_type = "vpc"
    category = "Networking"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "vpc:network": TargetShape(("vpc_arn", "vpc_id")),
        "vpc:subnet": TargetShape(("subnet_arn", "subnet_id")),
        "vpc:security-group": TargetShape(("security_group_arn", "security_group_id")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Place workloads in private subnets",
        "Use VPC endpoints for AWS service access",
        "Enable VPC flow logs",
        "Keep security group rules least-privilege",
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
            "vpc:network": self._bind_network,
            "vpc:subnet": self._bind_subnet,
            "vpc:security-group": self._bind_security_group,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(
            plan,
            target,
            binding,
            context,
            prefix="VPC",
            scope=f"binding.{self.service_type}",
            network=False,
        )
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_network(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        vpc_arn = read_attr(target, "vpc_arn")

        if binding.has_access("read"):
            plan.grant(("ec2:DescribeVpcAttribute",), vpc_arn)
        if binding.has_access("write"):
            plan.grant(("ec2:ModifyVpcAttribute", "ec2:CreateTags"), vpc_arn)
        if binding.has_access("admin"):
            plan.grant(("ec2:DeleteVpc", "ec2:AssociateVpcCidrBlock", "ec2:DisassociateVpcCidrBlock"), vpc_arn)

        plan.env("VPC_ID", read_attr(target, "vpc_id"))
        plan.env("VPC_ARN", vpc_arn)
        plan.env("VPC_CIDR_BLOCK", read_attr(target, "cidr_block"))
        plan.env("VPC_PRIVATE_SUBNET_IDS", read_attr(target, "private_subnet_ids"))
        plan.env("VPC_PUBLIC_SUBNET_IDS", read_attr(target, "public_subnet_ids"))

    def _bind_subnet(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        subnet_arn = read_attr(target, "subnet_arn")

        if binding.has_access("read"):
            plan.grant(("ec2:DescribeSubnets",), subnet_arn)
        if binding.has_access("write"):
            plan.grant(("ec2:CreateNetworkInterface", "ec2:ModifySubnetAttribute", "ec2:CreateTags"), subnet_arn)
        if binding.has_access("admin"):
            plan.grant(("ec2:DeleteSubnet",), subnet_arn)

        plan.env("SUBNET_ID", read_attr(target, "subnet_id"))
        plan.env("SUBNET_ARN", subnet_arn)
        plan.env("SUBNET_AVAILABILITY_ZONE", read_attr(target, "availability_zone"))
        plan.env("SUBNET_CIDR_BLOCK", read_attr(target, "cidr_block"))

    def _bind_security_group(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        sg_arn = read_attr(target, "security_group_arn")

        if binding.has_access("read"):
            plan.grant(("ec2:DescribeSecurityGroupRules",), sg_arn)
        if binding.has_access("write"):
            plan.grant(
                (
                    "ec2:AuthorizeSecurityGroupIngress",
                    "ec2:AuthorizeSecurityGroupEgress",
                    "ec2:RevokeSecurityGroupIngress",
                    "ec2:RevokeSecurityGroupEgress",
                    "ec2:ModifySecurityGroupRules",
                ),
                sg_arn,
            )
        if binding.has_access("admin"):
            plan.grant(("ec2:DeleteSecurityGroup", "ec2:CreateTags"), sg_arn)

        plan.env("SECURITY_GROUP_ID", read_attr(target, "security_group_id"))
        plan.env("SECURITY_GROUP_ARN", sg_arn)
