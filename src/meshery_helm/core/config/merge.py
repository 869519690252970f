# src/meshery_helm/core/config/merge.py
"""
Deep-merge de configuração (defaults + override local).

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total
    - escalar     → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError

O merge é puramente funcional: nenhum input é mutado.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _compatible(base_value: Any, override_value: Any) -> bool:
    # None funciona como "não definido" em qualquer lado (ex.: data_root: null)
    if base_value is None or override_value is None:
        return True
    # int/float são intercambiáveis para timeouts
    numeric = (int, float)
    if isinstance(base_value, numeric) and isinstance(override_value, numeric):
        return not isinstance(base_value, bool) and not isinstance(override_value, bool)
    return type(base_value) is type(override_value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override`, retornando um novo dicionário.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list) and (base_value is None or isinstance(base_value, list)):
            result[key] = deepcopy(override_value)
            continue

        if not _compatible(base_value, override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
