"""Atlas Infra — Config (core).

Resolução de configuração de componentes em camadas:
 - deep-merge determinístico (fallback → schema → perfil → usuário)
 - normalização de sub-estruturas opcionais
 - validação completa contra o schema do componente
 - carregamento de camadas a partir de YAML/JSON
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigurationError,
    InvalidConfigRootTypeError,
    LayerFileNotFoundError,
    UnknownComponentTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge, merge_layers, flatten_leaves  # noqa: F401
from .normalize import normalize  # noqa: F401
from .hashing import compute_config_hash  # noqa: F401
from .loader import load_layer_file, load_profiles  # noqa: F401
from .resolver import (  # noqa: F401
    BASELINE_PROFILE,
    ComponentConfigSpec,
    ConfigLayer,
    ConfigResolver,
    LayerContribution,
    ResolvedConfig,
    resolve_config,
)
