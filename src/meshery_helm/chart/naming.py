# src/meshery_helm/chart/naming.py
"""
Sanitização de nomes de chart.

Converte o nome livre de um design (ex.: "My App!! v2") em um identificador
seguro para uso como componente de path e como campo `name` do Chart.yaml
(ex.: "my-app-v2").

Invariantes:
    - A função é total: nunca levanta exceção
    - O resultado casa com `^[a-z0-9-]{1,40}$`, sem `-` nas pontas nem duplicado
    - Entradas que não sobrevivem à sanitização resultam em FALLBACK_CHART_NAME
"""

import re

FALLBACK_CHART_NAME = "meshery-design"
MAX_CHART_NAME_LENGTH = 40

_DISALLOWED = re.compile(r"[^a-z0-9-]+")
_DASH_RUNS = re.compile(r"-{2,}")


def sanitize_chart_name(name: str) -> str:
    """
    Normaliza um nome de exibição arbitrário em um nome de chart válido.

    Algoritmo:
        1. lower-case
        2. cada sequência de caracteres fora de `[a-z0-9-]` vira um único `-`
        3. sequências de `-` colapsam para um
        4. `-` nas pontas são removidos
        5. resultado vazio → FALLBACK_CHART_NAME
        6. corte em MAX_CHART_NAME_LENGTH, removendo `-` deixado pelo corte

    Args:
        name (str): Nome livre do design. `None` é tratado como vazio.

    Returns:
        str: Nome de chart não vazio e seguro.
    """
    if not name:
        return FALLBACK_CHART_NAME

    result = _DISALLOWED.sub("-", str(name).lower())
    result = _DASH_RUNS.sub("-", result)
    result = result.strip("-")

    if not result:
        return FALLBACK_CHART_NAME

    if len(result) > MAX_CHART_NAME_LENGTH:
        result = result[:MAX_CHART_NAME_LENGTH].strip("-")

    return result
