"""Atlas Infra — Schema (core).

Validação estrutural de configuração contra schemas declarativos:
 - validação depth-first com coleta completa de violações
 - extração de defaults declarados (camada de schema)
 - formatação humana de violações
"""

from .errors import SchemaError, SchemaValidationError  # noqa: F401
from .types import ValidationIssue, ValidationResult  # noqa: F401
from .validator import validate, is_closed  # noqa: F401
from .defaults import extract_defaults, string_map, is_string_map, is_object_schema  # noqa: F401
from .formatter import format_issues  # noqa: F401
