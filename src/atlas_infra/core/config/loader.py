# src/atlas_infra/core/config/loader.py
"""
Loader canônico de camadas de configuração do Atlas Infra.

Este módulo é responsável por carregar, a partir do disco, os documentos
que alimentam a resolução de configuração:

    - arquivos de perfis nomeados (`{perfil: configuração parcial}`)
    - configurações parciais vindas de manifests de usuário

Formatos suportados (v1):
    - YAML (.yaml, .yml)
    - JSON (.json)

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Arquivos YAML vazios são interpretados como dicionários vazios
    - O formato é inferido pela extensão, nunca pelo conteúdo

Limites explícitos:
    - Não resolve nem mescla camadas (ver `resolver`)
    - Não carrega schemas
    - Não valida semântica de componente
"""

from pathlib import Path
from typing import Any, Dict, Union
import json

import yaml  # PyYAML

from .errors import (
    InvalidConfigRootTypeError,
    LayerFileNotFoundError,
    UnsupportedConfigFormatError,
)


def load_layer_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um arquivo de camada de configuração e valida sua estrutura básica.

    Args:
        path (Union[str, Path]): Caminho para o arquivo YAML ou JSON.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        LayerFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)
    if not path.exists():
        raise LayerFileNotFoundError(
            f"Arquivo de camada não encontrado: {path}",
            details={"path": str(path)},
        )

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix}",
            details={"path": str(path), "suffix": path.suffix},
        )

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}",
            details={"path": str(path)},
        )

    return data


def load_profiles(path: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """
    Carrega um documento de perfis nomeados.

    Cada chave de primeiro nível é o nome de um perfil (ex.: `baseline`,
    `fedramp-high`) e seu valor é a configuração parcial daquele perfil.

    Raises:
        InvalidConfigRootTypeError: Se algum perfil não for um dicionário.
    """
    data = load_layer_file(path)
    for name, partial in data.items():
        if partial is None:
            data[name] = {}
        elif not isinstance(partial, dict):
            raise InvalidConfigRootTypeError(
                f"Perfil '{name}' deve ser dict, recebido: {type(partial).__name__}",
                details={"path": str(path), "profile": name},
            )
    return data
