# src/atlas_infra/binders/cloudfront.py
"""
Estratégia de binding para Amazon CloudFront.

Capabilities:
    - cloudfront:distribution → leitura, gestão e invalidação de cache
    - cloudfront:cache-policy → leitura e gestão de uma cache policy

`invoke` em uma distribution libera `CreateInvalidation`.
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


class CloudFrontBinderStrategy:
    service_type = "cloudfront"
    category = "CDN"
    accepted_access = frozenset({"read", "write", "admin", "invoke"})
    shapes = {
        "cloudfront:distribution": TargetShape(("distribution_arn", "distribution_id")),
        "cloudfront:cache-policy": TargetShape(("cache_policy_arn", "cache_policy_id")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use origin access control for S3 origins",
        "Enforce HTTPS with a redirect viewer protocol policy",
        "Attach a web ACL to public distributions",
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

        if binding.capability == "cloudfront:distribution":
            arn = read_attr(target, "distribution_arn")
            if binding.has_access("read"):
                plan.grant(
                    (
                        "cloudfront:GetDistribution",
                        "cloudfront:GetDistributionConfig",
                        "cloudfront:ListInvalidations",
                        "cloudfront:GetInvalidation",
                    ),
                    arn,
                )
            if binding.has_access("write"):
                plan.grant(("cloudfront:UpdateDistribution", "cloudfront:TagResource"), arn)
            if binding.has_access("admin"):
                plan.grant(("cloudfront:DeleteDistribution", "cloudfront:UntagResource"), arn)
            if binding.has_access("invoke"):
                plan.grant(("cloudfront:CreateInvalidation",), arn)
            plan.env("CLOUDFRONT_DISTRIBUTION_ID", read_attr(target, "distribution_id"))
            plan.env("CLOUDFRONT_DISTRIBUTION_ARN", arn)
            plan.env("CLOUDFRONT_DOMAIN_NAME", read_attr(target, "domain_name"))
            plan.env("CLOUDFRONT_PRICE_CLASS", read_attr(target, "price_class"))
            plan.env("CLOUDFRONT_STATUS", read_attr(target, "status"))
        else:
            arn = read_attr(target, "cache_policy_arn")
            if binding.has_access("read"):
                plan.grant(("cloudfront:GetCachePolicy", "cloudfront:GetCachePolicyConfig"), arn)
            if binding.has_access("write"):
                plan.grant(("cloudfront:UpdateCachePolicy",), arn)
            if binding.has_access("admin"):
                plan.grant(("cloudfront:DeleteCachePolicy",), arn)
            plan.env("CLOUDFRONT_CACHE_POLICY_ID", read_attr(target, "cache_policy_id"))
            plan.env("CLOUDFRONT_CACHE_POLICY_ARN", arn)
            plan.env("CLOUDFRONT_DEFAULT_TTL", read_attr(target, "default_ttl"))
            plan.env("CLOUDFRONT_MIN_TTL", read_attr(target, "min_ttl"))
            plan.env("CLOUDFRONT_MAX_TTL", read_attr(target, "max_ttl"))

        apply_secure_mode(plan, target, binding, context, prefix="CLOUDFRONT", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
