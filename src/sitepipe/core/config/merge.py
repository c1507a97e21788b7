"""
Deep-merge da configuração do site.

Regras, por chave do override:
    - mapeamento sobre mapeamento → merge recursivo
    - lista → substitui a lista inteira
    - escalar → substitui
    - `None` → substitui (ex.: desligar `templates.ready_timeout_seconds`)
    - tipos incompatíveis → ConfigTypeConflictError com o caminho pontuado
      da chave (ex.: `listing.descending`)

Nenhum dos dicionários de entrada é mutado.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError

_NUMERIC = (int, float)


def _compatible(base_value: Any, override_value: Any) -> bool:
    if base_value is None or override_value is None:
        return True
    if isinstance(base_value, bool) or isinstance(override_value, bool):
        return type(base_value) is type(override_value)
    # 30 e 2.5 são ambos números válidos em YAML
    if isinstance(base_value, _NUMERIC) and isinstance(override_value, _NUMERIC):
        return True
    return type(base_value) is type(override_value)


def _merge_into(target: Dict[str, Any], override: Dict[str, Any], path: str) -> None:
    for key, value in override.items():
        dotted = f"{path}.{key}" if path else str(key)
        current = target.get(key)

        if isinstance(current, dict) and isinstance(value, dict):
            _merge_into(current, value, dotted)
        elif key in target and not isinstance(value, list) and not _compatible(current, value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{dotted}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )
        else:
            target[key] = deepcopy(value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Retorna `base` com `override` aplicado, sem mutar nenhum dos dois.

    Raises:
        ConfigTypeConflictError: raiz que não é dict, ou chave com tipos
            incompatíveis entre base e override.
    """
    for name, value in (("base", base), ("override", override)):
        if not isinstance(value, dict):
            raise ConfigTypeConflictError(
                f"Deep-merge requer dicts na raiz: {name} é {type(value).__name__}"
            )

    merged = deepcopy(base)
    _merge_into(merged, override, "")
    return merged
