# src/sitepipe/core/config/__init__.py
"""
Camada de configuração do sitepipe.

A configuração de um build é resolvida a partir de:
    - `config.defaults.yaml`, distribuído dentro do pacote (obrigatório)
    - um arquivo local de overrides em YAML ou JSON (opcional)

Responsabilidades do pacote:
    - Carregamento dos arquivos de configuração
    - Resolução da configuração final via deep-merge determinístico
    - Validação estrutural básica (tipo raiz, conflitos de tipo)

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida semântica (ex.: existência de diretórios)
    - Não monta o grafo nem executa o build
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import DEFAULTS_PATH, load_config
from .merge import deep_merge

__all__ = [
    "DEFAULTS_PATH",
    "load_config",
    "deep_merge",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
]
