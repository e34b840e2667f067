# src/atlas_infra/binders/amplify.py
"""
Estratégia de binding para AWS Amplify Hosting.

Capabilities:
    - amplify:app    → aplicação
    - amplify:branch → branch conectada da aplicação
    - amplify:domain → associação de domínio customizado
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


# (read, write, admin) por capability
_ACTIONS = {
    "amplify:app": (
        ("amplify:GetApp", "amplify:ListApps"),
        ("amplify:UpdateApp",),
        ("amplify:DeleteApp", "amplify:TagResource"),
    ),
    "amplify:branch": (
        ("amplify:GetBranch", "amplify:ListBranches", "amplify:ListJobs"),
        ("amplify:UpdateBranch", "amplify:StartJob", "amplify:StopJob"),
        ("amplify:DeleteBranch",),
    ),
    "amplify:domain": (
        ("amplify:GetDomainAssociation", "amplify:ListDomainAssociations"),
        ("amplify:UpdateDomainAssociation",),
        ("amplify:DeleteDomainAssociation",),
    ),
}


class AmplifyBinderStrategy:
    service_type = "amplify"
    category = "Mobile"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "amplify:app": TargetShape(("app_arn", "app_id")),
        "amplify:branch": TargetShape(("branch_arn", "branch_name", "app_id")),
        "amplify:domain": TargetShape(("domain_association_arn", "domain_name", "app_id")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Enable branch auto-build only for protected branches",
        "Use password protection on preview branches",
        "Serve the app on a custom domain with HTTPS",
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
        resource_arn = read_attr(target, self.shapes[capability].primary)
        read, write, admin = _ACTIONS[capability]
        for mode, actions in (("read", read), ("write", write), ("admin", admin)):
            if binding.has_access(mode):
                plan.grant(actions, resource_arn)

        plan.env("AMPLIFY_APP_ID", read_attr(target, "app_id"))
        if capability == "amplify:app":
            plan.env("AMPLIFY_APP_ARN", resource_arn)
            plan.env("AMPLIFY_APP_NAME", read_attr(target, "app_name"))
            plan.env("AMPLIFY_APP_DESCRIPTION", read_attr(target, "description"))
            plan.env("AMPLIFY_REPOSITORY", read_attr(target, "repository"))
            plan.env("AMPLIFY_PLATFORM", read_attr(target, "platform"))
            plan.env("AMPLIFY_STATUS", read_attr(target, "status"))
            plan.env("AMPLIFY_DEFAULT_DOMAIN", read_attr(target, "default_domain"))
        elif capability == "amplify:branch":
            plan.env("AMPLIFY_BRANCH_NAME", read_attr(target, "branch_name"))
            plan.env("AMPLIFY_BRANCH_ARN", resource_arn)
            plan.env("AMPLIFY_BUILD_SPEC", read_attr(target, "build_spec"))
            plan.env("AMPLIFY_WEBHOOK_URL", read_attr(target, "webhook_url"))
        else:
            plan.env("AMPLIFY_CUSTOM_DOMAIN", read_attr(target, "domain_name"))
            plan.env("AMPLIFY_DOMAIN_ASSOCIATION_ARN", resource_arn)

        apply_secure_mode(plan, target, binding, context, prefix="AMPLIFY", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
