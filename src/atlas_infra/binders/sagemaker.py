# src/atlas_infra/binders/sagemaker.py
"""
Estratégia de binding para Amazon SageMaker.

Capabilities:
    - sagemaker:notebook     → instância de notebook
    - sagemaker:model        → modelo registrado
    - sagemaker:endpoint     → endpoint de inferência (`invoke` chama o modelo)
    - sagemaker:training-job → job de treinamento
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


class SageMakerBinderStrategy:
    service_type = "sagemaker"
    category = "ML"
    accepted_access = frozenset({"read", "write", "admin", "invoke"})
    shapes = {
        "sagemaker:notebook": TargetShape(("notebook_instance_arn", "notebook_instance_name")),
        "sagemaker:model": TargetShape(("model_arn", "model_name")),
        "sagemaker:endpoint": TargetShape(("endpoint_arn", "endpoint_name")),
        "sagemaker:training-job": TargetShape(("training_job_arn", "training_job_name")),
    }
    supported_capabilities = tuple(shapes)
    recommendations = (
        "Run notebooks and endpoints inside a VPC",
        "Encrypt model artifacts and training volumes with KMS",
        "Enable data capture on endpoints for model monitoring",
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
            "sagemaker:notebook": self._bind_notebook,
            "sagemaker:model": self._bind_model,
            "sagemaker:endpoint": self._bind_endpoint,
            "sagemaker:training-job": self._bind_training_job,
        }[binding.capability]
        handler(plan, target, binding)

        apply_secure_mode(plan, target, binding, context, prefix="SAGEMAKER", scope=f"binding.{self.service_type}")
        commit_binding(plan, source, binding, context, service_type=self.service_type)

    def _bind_notebook(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        notebook_arn = read_attr(target, "notebook_instance_arn")

        if binding.has_access("read"):
            plan.grant(("sagemaker:DescribeNotebookInstance",), notebook_arn)
        if binding.has_access("write", "invoke"):
            plan.grant(("sagemaker:CreatePresignedNotebookInstanceUrl",), notebook_arn)
        if binding.has_access("admin"):
            plan.grant(
                (
                    "sagemaker:StartNotebookInstance",
                    "sagemaker:StopNotebookInstance",
                    "sagemaker:UpdateNotebookInstance",
                    "sagemaker:DeleteNotebookInstance",
                ),
                notebook_arn,
            )

        plan.env("SAGEMAKER_NOTEBOOK_NAME", read_attr(target, "notebook_instance_name"))
        plan.env("SAGEMAKER_NOTEBOOK_ARN", notebook_arn)
        plan.env("SAGEMAKER_NOTEBOOK_URL", read_attr(target, "url"))

    def _bind_model(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        model_arn = read_attr(target, "model_arn")

        if binding.has_access("read", "invoke"):
            plan.grant(("sagemaker:DescribeModel",), model_arn)
        if binding.has_access("write"):
            plan.grant(("sagemaker:AddTags",), model_arn)
        if binding.has_access("admin"):
            plan.grant(("sagemaker:DeleteModel",), model_arn)
            if has_attr(target, "execution_role_arn"):
                plan.grant(("iam:PassRole",), read_attr(target, "execution_role_arn"))

        plan.env("SAGEMAKER_MODEL_NAME", read_attr(target, "model_name"))
        plan.env("SAGEMAKER_MODEL_ARN", model_arn)

    def _bind_endpoint(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        endpoint_arn = read_attr(target, "endpoint_arn")

        if binding.has_access("read"):
            plan.grant(("sagemaker:DescribeEndpoint", "sagemaker:DescribeEndpointConfig"), endpoint_arn)
        if binding.has_access("invoke"):
            plan.grant(("sagemaker:InvokeEndpoint", "sagemaker:InvokeEndpointAsync"), endpoint_arn)
        if binding.has_access("write"):
            plan.grant(("sagemaker:UpdateEndpoint", "sagemaker:UpdateEndpointWeightsAndCapacities"), endpoint_arn)
        if binding.has_access("admin"):
            plan.grant(("sagemaker:DeleteEndpoint",), endpoint_arn)

        plan.env("SAGEMAKER_ENDPOINT_NAME", read_attr(target, "endpoint_name"))
        plan.env("SAGEMAKER_ENDPOINT_ARN", endpoint_arn)
        plan.env("SAGEMAKER_ENDPOINT_CONFIG_NAME", read_attr(target, "endpoint_config_name"))

    def _bind_training_job(self, plan: BindingPlan, target: Any, binding: ComponentBinding) -> None:
        job_arn = read_attr(target, "training_job_arn")

        if binding.has_access("read"):
            plan.grant(("sagemaker:DescribeTrainingJob",), job_arn)
        if binding.has_access("write", "admin"):
            plan.grant(("sagemaker:StopTrainingJob",), job_arn)
        if binding.has_access("admin") and has_attr(target, "role_arn"):
            plan.grant(("iam:PassRole",), read_attr(target, "role_arn"))

        plan.env("SAGEMAKER_TRAINING_JOB_NAME", read_attr(target, "training_job_name"))
        plan.env("SAGEMAKER_TRAINING_JOB_ARN", job_arn)
        plan.env("SAGEMAKER_MODEL_ARTIFACTS", read_attr(target, "model_artifacts"))
