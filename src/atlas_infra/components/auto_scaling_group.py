# src/atlas_infra/components/auto_scaling_group.py
"""
Especificação de configuração do componente `auto-scaling-group`.

Descreve um Auto Scaling Group de EC2 com launch template, limites de
capacidade, volume raiz (com KMS opcional), health check, políticas de
terminação, posicionamento em VPC, segurança, alarmes e tags.

Camadas:
    - fallback  → literal `FALLBACKS` (capacidade 1/3/2, t3.micro, gp3, ...)
    - schema    → `default` declarados em `SCHEMA`
    - perfis    → `baseline`, `fedramp-moderate`, `fedramp-high`

Decisões arquiteturais:
    - `tags` é o único mapa aberto (string → string)
    - Listas (`terminationPolicies`, `subnetIds`, ...) são sempre
      substituídas por inteiro, nunca concatenadas
"""

from __future__ import annotations

from typing import Any, Dict

from atlas_infra.core.config.resolver import BASELINE_PROFILE, ComponentConfigSpec
from atlas_infra.core.schema.defaults import string_map


COMPONENT_TYPE = "auto-scaling-group"

_STRING_LIST: Dict[str, Any] = {"type": "array", "items": {"type": "string"}}


def _alarm_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "enabled": {"type": "boolean"},
            "threshold": {"type": "number"},
            "evaluationPeriods": {"type": "integer", "minimum": 1},
            "periodMinutes": {"type": "integer", "minimum": 1},
            "comparisonOperator": {"type": "string", "enum": ["GT", "GTE", "LT", "LTE"]},
            "treatMissingData": {
                "type": "string",
                "enum": ["breaching", "not-breaching", "ignore", "missing"],
            },
            "statistic": {"type": "string", "default": "Average"},
        },
    }


SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "launchTemplate": {
            "type": "object",
            "properties": {
                "instanceType": {"type": "string"},
                "ami": {
                    "type": "object",
                    "properties": {
                        "amiId": {"type": "string"},
                        "namePattern": {"type": "string"},
                        "owner": {"type": "string"},
                    },
                },
                "userData": {"type": "string"},
                "keyName": {"type": "string"},
                "detailedMonitoring": {"type": "boolean"},
                "requireImdsv2": {"type": "boolean"},
                "installAgents": {
                    "type": "object",
                    "properties": {
                        "ssm": {"type": "boolean"},
                        "cloudwatch": {"type": "boolean"},
                        "stigHardening": {"type": "boolean"},
                    },
                },
            },
        },
        "autoScaling": {
            "type": "object",
            "properties": {
                "minCapacity": {"type": "integer", "minimum": 0},
                "maxCapacity": {"type": "integer", "minimum": 1},
                "desiredCapacity": {"type": "integer", "minimum": 0},
            },
        },
        "storage": {
            "type": "object",
            "properties": {
                "rootVolumeSize": {"type": "integer", "minimum": 8, "maximum": 16384},
                "rootVolumeType": {"type": "string", "enum": ["gp2", "gp3", "io1", "io2"]},
                "encrypted": {"type": "boolean"},
                "kms": {
                    "type": "object",
                    "properties": {
                        "useCustomerManagedKey": {"type": "boolean"},
                        "kmsKeyArn": {"type": "string"},
                        "enableKeyRotation": {"type": "boolean"},
                    },
                },
            },
        },
        "healthCheck": {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": ["EC2", "ELB"]},
                "gracePeriod": {"type": "integer", "minimum": 0},
            },
        },
        "terminationPolicies": {
            "type": "array",
            "items": {
                "type": "string",
                "enum": [
                    "Default",
                    "OldestInstance",
                    "NewestInstance",
                    "OldestLaunchConfiguration",
                    "OldestLaunchTemplate",
                    "ClosestToNextInstanceHour",
                    "AllocationStrategy",
                ],
            },
        },
        "vpc": {
            "type": "object",
            "properties": {
                "vpcId": {"type": "string"},
                "subnetIds": _STRING_LIST,
                "securityGroupIds": _STRING_LIST,
                "subnetType": {"type": "string", "enum": ["PUBLIC", "PRIVATE", "ISOLATED"]},
                "allowAllOutbound": {"type": "boolean"},
            },
        },
        "security": {
            "type": "object",
            "properties": {
                "managedPolicies": _STRING_LIST,
                "attachLogDeliveryPolicy": {"type": "boolean"},
                "stigComplianceTag": {"type": "boolean"},
            },
        },
        "monitoring": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "alarms": {
                    "type": "object",
                    "properties": {
                        "cpuHigh": _alarm_schema(),
                        "inService": _alarm_schema(),
                    },
                },
            },
        },
        "tags": string_map(),
    },
}


FALLBACKS: Dict[str, Any] = {
    "launchTemplate": {
        "instanceType": "t3.micro",
        "detailedMonitoring": False,
        "requireImdsv2": False,
        "installAgents": {"ssm": False, "cloudwatch": False, "stigHardening": False},
    },
    "autoScaling": {"minCapacity": 1, "maxCapacity": 3, "desiredCapacity": 2},
    "storage": {
        "rootVolumeSize": 20,
        "rootVolumeType": "gp3",
        "encrypted": False,
        "kms": {"useCustomerManagedKey": False, "enableKeyRotation": False},
    },
    "healthCheck": {"type": "EC2", "gracePeriod": 300},
    "terminationPolicies": ["Default"],
    "vpc": {"subnetType": "PUBLIC", "allowAllOutbound": True},
    "security": {"attachLogDeliveryPolicy": False, "stigComplianceTag": False},
    "monitoring": {
        "enabled": True,
        "alarms": {
            "cpuHigh": {
                "enabled": True,
                "threshold": 80,
                "evaluationPeriods": 2,
                "periodMinutes": 5,
                "comparisonOperator": "GT",
                "treatMissingData": "not-breaching",
            },
            "inService": {
                "enabled": True,
                "threshold": 1,
                "evaluationPeriods": 1,
                "periodMinutes": 1,
                "comparisonOperator": "LT",
                "treatMissingData": "breaching",
            },
        },
    },
}


PROFILES: Dict[str, Dict[str, Any]] = {
    BASELINE_PROFILE: {
        "storage": {"encrypted": False},
    },
    "fedramp-moderate": {
        "launchTemplate": {
            "instanceType": "t3.medium",
            "detailedMonitoring": True,
            "requireImdsv2": True,
            "installAgents": {"ssm": True, "cloudwatch": True},
        },
        "storage": {"rootVolumeSize": 50, "encrypted": True},
        "healthCheck": {"gracePeriod": 180},
        "vpc": {"subnetType": "PRIVATE", "allowAllOutbound": False},
        "security": {"attachLogDeliveryPolicy": True},
    },
    "fedramp-high": {
        "launchTemplate": {
            "instanceType": "m5.large",
            "detailedMonitoring": True,
            "requireImdsv2": True,
            "installAgents": {"ssm": True, "cloudwatch": True, "stigHardening": True},
        },
        "storage": {
            "rootVolumeSize": 100,
            "encrypted": True,
            "kms": {"useCustomerManagedKey": True, "enableKeyRotation": True},
        },
        "healthCheck": {"gracePeriod": 120},
        "vpc": {"subnetType": "PRIVATE", "allowAllOutbound": False},
        "security": {
            "managedPolicies": ["AmazonSSMManagedInstanceCore", "CloudWatchAgentServerPolicy"],
            "attachLogDeliveryPolicy": True,
            "stigComplianceTag": True,
        },
        "monitoring": {"alarms": {"cpuHigh": {"threshold": 70}}},
    },
}


SPEC = ComponentConfigSpec(
    component_type=COMPONENT_TYPE,
    schema=SCHEMA,
    fallbacks=FALLBACKS,
    profiles=PROFILES,
    description="EC2 Auto Scaling Group com launch template",
)
