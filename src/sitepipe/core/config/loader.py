"""
Loader de configuração do sitepipe.

A configuração de um build nasce do `config.defaults.yaml` distribuído no
pacote (ou de um defaults explícito) e recebe, por deep-merge, um arquivo
local opcional com os overrides do site:

    site:
      source_dir: blog
      output_dir: public
    listing:
      descending: false

Invariantes:
    - O defaults é obrigatório; o local, não
    - O resultado é sempre um `dict` novo (os arquivos não são cacheados)
    - O formato é decidido pela extensão do arquivo

Limites explícitos:
    - Não verifica se diretórios e templates existem (o builder faz isso)
    - Não interpreta overrides de CLI (a CLI os aplica depois)
"""

from pathlib import Path
from typing import Any, Callable, Dict, IO, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

DEFAULTS_PATH = Path(__file__).with_name("config.defaults.yaml")

PathLike = Union[str, Path]

_PARSERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _read_mapping(path: Path) -> Dict[str, Any]:
    """
    Lê `path` como YAML ou JSON e exige um mapeamento na raiz.

    Um arquivo vazio vale `{}`.

    Raises:
        DefaultsNotFoundError: arquivo inexistente.
        UnsupportedConfigFormatError: extensão fora de .yaml/.yml/.json.
        InvalidConfigRootTypeError: raiz que não é mapeamento.
    """
    if not path.is_file():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix or '<sem extensão>'} ({path.name})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = parser(f)

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"{path.name}: a raiz deve ser um mapeamento, recebido {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: Optional[PathLike] = None,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva do build.

    Args:
        defaults_path: defaults alternativo; `None` usa o do pacote.
        local_path: overrides do site; ignorado quando o arquivo não existe.

    Raises:
        ConfigError: qualquer falha de leitura, formato ou merge (ver
            `sitepipe.core.config.errors`).
    """
    defaults = _read_mapping(Path(defaults_path) if defaults_path is not None else DEFAULTS_PATH)

    if local_path is None or not Path(local_path).exists():
        return defaults
    return deep_merge(defaults, _read_mapping(Path(local_path)))
