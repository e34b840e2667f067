# src/atlas_infra/binders/elastic_beanstalk.py
"""
Estratégia de binding para AWS Elastic Beanstalk.

Capabilities:
    - elasticbeanstalk:application → aplicação e suas versões
    - elasticbeanstalk:environment → ambiente em execução
    - elasticbeanstalk:version     → versão de aplicação específica
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


class ElasticBeanstalkBinderStrategy:
    service_type = "elastic-beanstalk"
    category = "Compute"
    accepted_access = frozenset({"read", "write", "admin"})
    shapes = {
        "elasticbeanstalk:application": TargetShape(("application_arn", "application_name")),
        "elasticbeanstalk:environment": TargetShape(("environment_arn", "environment_name", "application_name")),
        "elasticbeanstalk:version": TargetShape(("version_arn", "version_label", "application_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Use managed platform updates",
        "Enable enhanced health reporting",
        "Terminate HTTPS at the environment load balancer",
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

        if capability == "elasticbeanstalk:application":
            application_arn = read_attr(target, "application_arn")
            if binding.has_access("read"):
                plan.grant(
                    ("elasticbeanstalk:DescribeApplications", "elasticbeanstalk:DescribeApplicationVersions"),
                    application_arn,
                )
            if binding.has_access("write"):
                plan.grant(
                    ("elasticbeanstalk:UpdateApplication", "elasticbeanstalk:CreateApplicationVersion"),
                    application_arn,
                )
            if binding.has_access("admin"):
                plan.grant(("elasticbeanstalk:DeleteApplication",), application_arn)
            plan.env("EB_APPLICATION_NAME", read_attr(target, "application_name"))
            plan.env("EB_APPLICATION_ARN", application_arn)
        elif capability == "elasticbeanstalk:environment":
            environment_arn = read_attr(target, "environment_arn")
            if binding.has_access("read"):
                plan.grant(
                    (
                        "elasticbeanstalk:DescribeEnvironments",
                        "elasticbeanstalk:DescribeEnvironmentHealth",
                        "elasticbeanstalk:DescribeEvents",
                    ),
                    environment_arn,
                )
            if binding.has_access("write"):
                plan.grant(
                    ("elasticbeanstalk:UpdateEnvironment", "elasticbeanstalk:RestartAppServer"),
                    environment_arn,
                )
            if binding.has_access("admin"):
                plan.grant(
                    ("elasticbeanstalk:TerminateEnvironment", "elasticbeanstalk:RebuildEnvironment"),
                    environment_arn,
                )
            if has_attr(target, "ssl_certificate_arn"):
                plan.grant(("acm:DescribeCertificate",), read_attr(target, "ssl_certificate_arn"))
            plan.env("EB_APPLICATION_NAME", read_attr(target, "application_name"))
            plan.env("EB_ENVIRONMENT_NAME", read_attr(target, "environment_name"))
            plan.env("EB_ENVIRONMENT_ARN", environment_arn)
            plan.env("EB_ENVIRONMENT_URL", read_attr(target, "endpoint_url"))
            plan.env("EB_ENVIRONMENT_CNAME", read_attr(target, "cname"))
            plan.env("EB_PLATFORM_ARN", read_attr(target, "platform_arn"))
        else:
            version_arn = read_attr(target, "version_arn")
            if binding.has_access("read"):
                plan.grant(("elasticbeanstalk:DescribeApplicationVersions",), version_arn)
            if binding.has_access("write"):
                plan.grant(("elasticbeanstalk:UpdateApplicationVersion",), version_arn)
            if binding.has_access("admin"):
                plan.grant(("elasticbeanstalk:DeleteApplicationVersion",), version_arn)
            plan.env("EB_APPLICATION_NAME", read_attr(target, "application_name"))
            plan.env("EB_VERSION_LABEL", read_attr(target, "version_label"))
            plan.env("EB_VERSION_ARN", version_arn)

        apply_secure_mode(plan, target, binding, context, prefix="EB", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)
