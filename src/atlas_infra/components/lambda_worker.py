# src/atlas_infra/components/lambda_worker.py
"""
Especificação de configuração do componente `lambda-worker`.

Função Lambda de processamento assíncrono: runtime, memória, timeout,
fontes de evento (lista de objetos normalizados elemento a elemento),
DLQ, VPC, logging, tracing e variáveis de ambiente (mapa aberto).

`handler` é obrigatório: não existe default razoável para ele.
"""

from __future__ import annotations

from typing import Any, Dict

from atlas_infra.core.config.resolver import BASELINE_PROFILE, ComponentConfigSpec
from atlas_infra.core.schema.defaults import string_map


COMPONENT_TYPE = "lambda-worker"


SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["handler"],
    "properties": {
        "functionName": {"type": "string"},
        "handler": {"type": "string"},
        "runtime": {
            "type": "string",
            "enum": ["nodejs18.x", "nodejs20.x", "python3.9", "python3.10", "python3.11", "python3.12"],
            "default": "nodejs20.x",
        },
        "architecture": {"type": "string", "enum": ["x86_64", "arm64"], "default": "x86_64"},
        "memorySize": {"type": "integer", "minimum": 128, "maximum": 10240, "default": 256},
        "timeoutSeconds": {"type": "integer", "minimum": 1, "maximum": 900, "default": 300},
        "description": {"type": "string"},
        "codePath": {"type": "string", "default": "./src"},
        "environment": string_map(default={}),
        "reservedConcurrency": {"type": "integer", "minimum": 0, "maximum": 1000, "nullable": True},
        "deadLetterQueue": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean", "default": False},
                "queueArn": {"type": "string"},
                "maxReceiveCount": {"type": "integer", "minimum": 1, "maximum": 1000, "default": 3},
            },
        },
        "eventSources": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type"],
                "properties": {
                    "type": {"type": "string", "enum": ["sqs", "eventbridge-rule", "eventbridge-pattern"]},
                    "queueArn": {"type": "string"},
                    "schedule": {"type": "string"},
                    "eventPattern": {"type": "object"},
                    "batchSize": {"type": "integer", "minimum": 1, "maximum": 10000, "default": 10},
                    "enabled": {"type": "boolean", "default": True},
                },
            },
            "default": [],
        },
        "vpc": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "vpcId": {"type": "string"},
                "subnetIds": {"type": "array", "items": {"type": "string"}, "default": []},
                "securityGroupIds": {"type": "array", "items": {"type": "string"}, "default": []},
            },
            "default": {"enabled": False, "subnetIds": [], "securityGroupIds": []},
        },
        "kmsKeyArn": {"type": "string"},
        "logging": {
            "type": "object",
            "properties": {
                "logRetentionDays": {"type": "integer", "minimum": 1, "default": 30},
                "logFormat": {"type": "string", "enum": ["TEXT", "JSON"], "default": "JSON"},
                "systemLogLevel": {"type": "string", "enum": ["INFO", "WARN", "ERROR"], "default": "INFO"},
                "applicationLogLevel": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARN", "ERROR"],
                    "default": "INFO",
                },
            },
        },
        "tracing": {
            "type": "object",
            "properties": {
                "mode": {"type": "string", "enum": ["Active", "PassThrough"], "default": "PassThrough"},
            },
        },
        "observability": {
            "type": "object",
            "properties": {
                "otelEnabled": {"type": "boolean", "default": False},
                "otelLayerArn": {"type": "string"},
                "otelResourceAttributes": string_map(),
            },
        },
        "tags": string_map(),
    },
}


FALLBACKS: Dict[str, Any] = {
    "runtime": "nodejs20.x",
    "architecture": "x86_64",
    "memorySize": 256,
    "timeoutSeconds": 300,
    "codePath": "./src",
    "environment": {},
    "eventSources": [],
    "logging": {
        "logRetentionDays": 30,
        "logFormat": "JSON",
        "systemLogLevel": "INFO",
        "applicationLogLevel": "INFO",
    },
    "tracing": {"mode": "PassThrough"},
    "observability": {"otelEnabled": False, "otelResourceAttributes": {}},
}


PROFILES: Dict[str, Dict[str, Any]] = {
    BASELINE_PROFILE: {},
    "fedramp-moderate": {
        "memorySize": 768,
        "timeoutSeconds": 25,
        "logging": {"logRetentionDays": 90},
        "tracing": {"mode": "Active"},
        "observability": {"otelEnabled": True},
    },
    "fedramp-high": {
        "memorySize": 1024,
        "timeoutSeconds": 30,
        "deadLetterQueue": {"enabled": True},
        "logging": {"logRetentionDays": 365, "applicationLogLevel": "WARN"},
        "tracing": {"mode": "Active"},
        "observability": {"otelEnabled": True},
    },
}


SPEC = ComponentConfigSpec(
    component_type=COMPONENT_TYPE,
    schema=SCHEMA,
    fallbacks=FALLBACKS,
    profiles=PROFILES,
    description="Função Lambda de processamento assíncrono",
)
