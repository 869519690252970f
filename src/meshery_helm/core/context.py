# src/meshery_helm/core/context.py
"""
ConversionContext — Contexto canônico de uma conversão Design → Helm chart.

Este módulo define o **ConversionContext**, a estrutura passada a todas as
etapas de uma única conversão.

O ConversionContext é o meio permitido de:
- registro de logs estruturados da conversão (event log em memória)
- espelhamento desses eventos no `logging` da biblioteca padrão
- coleta de warnings não fatais (ex.: falha ao limpar o workspace)

Princípios fundamentais:
- Isolamento por conversão: cada chamada a `convert` cria o seu próprio contexto
- Nenhum estado mutável é compartilhado entre conversões concorrentes
- Eventos sempre incluem `build_id` e `step_id`
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def new_build_id() -> str:
    """Gera um identificador de build aleatório de 128 bits (hex, 32 chars)."""
    return uuid.uuid4().hex


@dataclass
class ConversionContext:
    """
    Contexto de execução de uma conversão.

    Campos canônicos:
    - build_id: identificador único da conversão (escopo do workspace temporário)
    - created_at: timestamp UTC de criação do contexto
    - logger_name: logger da biblioteca padrão que recebe o espelho dos eventos
    - events: log estruturado de eventos
    - warnings: warnings por step_id
    """

    build_id: str = field(default_factory=new_build_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: str = "meshery_helm"

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "build_id": self.build_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

        logger = logging.getLogger(self.logger_name)
        if extra:
            logger.log(_LEVELS.get(level, logging.INFO), "[%s] %s %s", step_id, message, extra)
        else:
            logger.log(_LEVELS.get(level, logging.INFO), "[%s] %s", step_id, message)

    def add_warning(self, *, step_id: str, message: str, **extra: Any) -> None:
        """Registra um warning não fatal e o emite como evento de nível `warning`."""
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)
        self.log(step_id=step_id, level="warning", message=message, **extra)

    def events_for(self, step_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("step_id") == step_id]
