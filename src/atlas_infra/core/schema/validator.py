"""
Validador estrutural canônico de configuração.

Este módulo implementa a validação de um objeto de configuração contra um
schema declarativo no estilo JSON Schema (subconjunto v1), percorrendo a
estrutura em profundidade e coletando todas as violações encontradas.

Palavras-chave suportadas (v1):
    - type                  → string, number, integer, boolean, object, array, null
                              (ou lista de tipos)
    - enum                  → valores permitidos
    - properties / required → forma de objetos
    - additionalProperties  → False (fechado), schema (mapa aberto tipado) ou True
    - items                 → schema aplicado a cada elemento de lista
    - minimum / maximum     → limites numéricos
    - nullable              → aceita None explícito

Chaves de objeto são sempre strings: uma chave de outro tipo (ex.: `2024`
vindo de YAML) é reportada como erro de tipo em `path.<chave>`, inclusive
dentro de mapas abertos e de valores sem schema.

Política de `additionalProperties` ausente:
    - objeto com `properties` declarado → fechado
    - objeto sem `properties`           → aberto

Princípios fundamentais:
    - A validação sempre completa a passada inteira
    - Nenhum input é mutado
    - Nenhuma exceção é levantada por violações (apenas coletadas)

Limites explícitos:
    - Não aplica defaults
    - Não realiza coerção de tipos
    - Não carrega schemas de arquivos
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from .types import (
    ISSUE_ENUM,
    ISSUE_MAXIMUM,
    ISSUE_MINIMUM,
    ISSUE_REQUIRED,
    ISSUE_TYPE,
    ISSUE_UNKNOWN_KEY,
    ValidationIssue,
    ValidationResult,
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": _is_number,
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, Mapping),
    "array": lambda v: isinstance(v, (list, tuple)),
    "null": lambda v: v is None,
}


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _declared_types(schema: Mapping[str, Any]) -> List[str]:
    declared = schema.get("type")
    if declared is None:
        return []
    if isinstance(declared, str):
        return [declared]
    return list(declared)


def is_closed(schema: Mapping[str, Any]) -> bool:
    """Indica se um schema de objeto rejeita chaves não declaradas."""
    extra = schema.get("additionalProperties")
    if extra is None:
        return "properties" in schema
    return extra is False


def _walk(value: Any, schema: Mapping[str, Any], path: str, issues: List[ValidationIssue]) -> None:
    if value is None and schema.get("nullable") is True:
        return

    types = _declared_types(schema)
    if types:
        unknown = [t for t in types if t not in _TYPE_CHECKS]
        if unknown:
            raise ValueError(f"unsupported schema type(s) at '{path or '<root>'}': {unknown}")
        if not any(_TYPE_CHECKS[t](value) for t in types):
            issues.append(
                ValidationIssue(
                    path=path,
                    code=ISSUE_TYPE,
                    message=f"expected {' | '.join(types)}, got {_type_name(value)}",
                )
            )
            # tipo errado: descer na estrutura só produziria ruído
            return

    if "enum" in schema and value not in schema["enum"]:
        allowed = ", ".join(repr(v) for v in schema["enum"])
        issues.append(
            ValidationIssue(
                path=path,
                code=ISSUE_ENUM,
                message=f"value {value!r} is not one of [{allowed}]",
            )
        )

    if _is_number(value):
        if "minimum" in schema and value < schema["minimum"]:
            issues.append(
                ValidationIssue(path=path, code=ISSUE_MINIMUM, message=f"value {value} is below minimum {schema['minimum']}")
            )
        if "maximum" in schema and value > schema["maximum"]:
            issues.append(
                ValidationIssue(path=path, code=ISSUE_MAXIMUM, message=f"value {value} is above maximum {schema['maximum']}")
            )

    if isinstance(value, Mapping):
        _walk_object(value, schema, path, issues)
    elif isinstance(value, (list, tuple)) and isinstance(schema.get("items"), Mapping):
        for index, item in enumerate(value):
            _walk(item, schema["items"], f"{path}[{index}]", issues)
    elif isinstance(value, (list, tuple)):
        _check_keys(value, path, issues)


def _key_type_issue(key: Any, path: str) -> ValidationIssue:
    return ValidationIssue(
        path=path,
        code=ISSUE_TYPE,
        message=f"expected string key, got {_type_name(key)} ({key!r})",
    )


def _check_keys(value: Any, path: str, issues: List[ValidationIssue]) -> None:
    # valores sem schema ainda precisam de chaves string para serem serializáveis
    if isinstance(value, Mapping):
        for key, child in value.items():
            child_path = _join(path, str(key))
            if not isinstance(key, str):
                issues.append(_key_type_issue(key, child_path))
            _check_keys(child, child_path, issues)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_keys(item, f"{path}[{index}]", issues)


def _walk_object(value: Mapping[str, Any], schema: Mapping[str, Any], path: str, issues: List[ValidationIssue]) -> None:
    properties: Dict[str, Any] = schema.get("properties") or {}

    for key in schema.get("required") or []:
        if key not in value:
            issues.append(
                ValidationIssue(path=_join(path, key), code=ISSUE_REQUIRED, message="required key is missing")
            )

    extra_schema = schema.get("additionalProperties")
    closed = is_closed(schema)

    for key in value:
        child_path = _join(path, str(key))
        if not isinstance(key, str):
            issues.append(_key_type_issue(key, child_path))
            continue
        if key in properties:
            _walk(value[key], properties[key], child_path, issues)
        elif closed:
            issues.append(
                ValidationIssue(
                    path=child_path,
                    code=ISSUE_UNKNOWN_KEY,
                    message=f"unknown key '{key}' is not declared in the schema",
                )
            )
        elif isinstance(extra_schema, Mapping):
            _walk(value[key], extra_schema, child_path, issues)
        else:
            _check_keys(value[key], child_path, issues)


def validate(config: Any, schema: Mapping[str, Any]) -> ValidationResult:
    """
    Valida uma configuração contra um schema declarativo.

    A passada percorre toda a estrutura em profundidade e retorna todas as
    violações encontradas, permitindo que o autor do manifest corrija
    todos os problemas em um único ciclo de edição.

    Args:
        config (Any): Objeto de configuração (tipicamente um dict).
        schema (Mapping[str, Any]): Schema declarativo (subconjunto JSON Schema).

    Returns:
        ValidationResult: Resultado com a lista completa de issues.

    Raises:
        ValueError: Se o próprio schema declarar um tipo não suportado.
    """
    issues: List[ValidationIssue] = []
    _walk(config, schema, "", issues)
    return ValidationResult(issues=tuple(issues))
