# src/meshery_helm/core/logging.py
"""
Configuração de logging do conversor.

A biblioteca apenas emite registros via `logging.getLogger(__name__)`; quem
decide handlers e formato é a aplicação hospedeira. `configure_logging` existe
para scripts e testes que querem ver a saída sem montar handlers manualmente.
"""

from __future__ import annotations

import logging
from typing import Union

LOGGER_NAME = "meshery_helm"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO, *, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Instala um StreamHandler no logger raiz do pacote (idempotente)."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(getattr(h, "_meshery_helm", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler._meshery_helm = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
