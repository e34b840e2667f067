"""Atlas Infra — Binders.

Estratégias de binding por tipo de serviço alvo. Cada estratégia é uma
classe independente que implementa o protocolo `BinderStrategy`.
"""

from typing import List

from .amplify import AmplifyBinderStrategy
from .app_runner import AppRunnerBinderStrategy
from .batch import BatchBinderStrategy
from .cloudfront import CloudFrontBinderStrategy
from .dynamodb import DynamoDbBinderStrategy
from .ecs_fargate import EcsFargateBinderStrategy
from .efs import EfsBinderStrategy
from .eks import EksBinderStrategy
from .elastic_beanstalk import ElasticBeanstalkBinderStrategy
from .emr import EmrBinderStrategy
from .eventbridge import EventBridgeBinderStrategy
from .iot_core import IotCoreBinderStrategy
from .kinesis import KinesisBinderStrategy
from .kms import KmsBinderStrategy
from .lambda_ import LambdaBinderStrategy
from .lightsail import LightsailBinderStrategy
from .neptune import NeptuneBinderStrategy
from .sagemaker import SageMakerBinderStrategy
from .secrets_manager import SecretsManagerBinderStrategy
from .sns import SnsBinderStrategy
from .sqs import SqsBinderStrategy
from .step_functions import StepFunctionsBinderStrategy
from .vpc import VpcBinderStrategy


def default_strategies_v1() -> List[object]:
    """Catálogo v1: uma instância de cada estratégia."""
    return [
        SqsBinderStrategy(),
        SnsBinderStrategy(),
        EventBridgeBinderStrategy(),
        EksBinderStrategy(),
        EcsFargateBinderStrategy(),
        LambdaBinderStrategy(),
        AppRunnerBinderStrategy(),
        BatchBinderStrategy(),
        ElasticBeanstalkBinderStrategy(),
        LightsailBinderStrategy(),
        DynamoDbBinderStrategy(),
        NeptuneBinderStrategy(),
        EfsBinderStrategy(),
        KmsBinderStrategy(),
        SecretsManagerBinderStrategy(),
        StepFunctionsBinderStrategy(),
        KinesisBinderStrategy(),
        EmrBinderStrategy(),
        SageMakerBinderStrategy(),
        IotCoreBinderStrategy(),
        AmplifyBinderStrategy(),
        CloudFrontBinderStrategy(),
        VpcBinderStrategy(),
    ]


__all__ = [
    "AmplifyBinderStrategy",
    "AppRunnerBinderStrategy",
    "BatchBinderStrategy",
    "CloudFrontBinderStrategy",
    "DynamoDbBinderStrategy",
    "EcsFargateBinderStrategy",
    "EfsBinderStrategy",
    "EksBinderStrategy",
    "ElasticBeanstalkBinderStrategy",
    "EmrBinderStrategy",
    "EventBridgeBinderStrategy",
    "IotCoreBinderStrategy",
    "KinesisBinderStrategy",
    "KmsBinderStrategy",
    "LambdaBinderStrategy",
    "LightsailBinderStrategy",
    "NeptuneBinderStrategy",
    "SageMakerBinderStrategy",
    "SecretsManagerBinderStrategy",
    "SnsBinderStrategy",
    "SqsBinderStrategy",
    "StepFunctionsBinderStrategy",
    "VpcBinderStrategy",
    "default_strategies_v1",
]
