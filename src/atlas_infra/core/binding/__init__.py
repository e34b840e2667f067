"""Atlas Infra — Binding (core).

Resolução de bindings entre componentes:
 - descriptor imutável de binding
 - contrato de estratégia + pré-condições compartilhadas
 - passada de secure mode (funções livres)
 - registry de estratégias por tipo de serviço
 - execução em lote com payloads de erro
"""

from .errors import (  # noqa: F401
    BindingError,
    BindingDescriptorError,
    UnsupportedAccessModeError,
    MissingTargetAttributeError,
    InvalidTargetAttributeError,
    UnsupportedCapabilityError,
    UnknownServiceTypeError,
)
from .descriptor import ACCESS_VOCABULARY, ComponentBinding  # noqa: F401
from .source import PermissionStatement, SourceComponent, ComponentHandle  # noqa: F401
from .target import TargetShape, read_attr, has_attr, first_attr, require_attributes  # noqa: F401
from .plan import BindingPlan  # noqa: F401
from .context import BindingContext  # noqa: F401
from .secure import (  # noqa: F401
    SECURE_TOGGLES,
    secure_mode_enabled,
    seed_environment,
    emit_encryption,
    emit_network_placement,
    emit_backup_retention,
    emit_audit_logging,
    apply_secure_mode,
)
from .strategy import BinderStrategy, prepare_binding, commit_binding  # noqa: F401
from .registry import BinderRegistry, default_registry  # noqa: F401
from .executor import (  # noqa: F401
    BindingStatus,
    BindingRequest,
    BindingOutcome,
    BindingReport,
    run_bindings,
)
