# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - utils/structured_logger.py
# Logging estruturado (JSON por linha) para análise automatizada
# ===================================================================

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

APP_LOGGER_NAME = "NightReportBoard"


class StructuredLogger:
    """Logger estruturado que gera logs em formato JSON para fácil parsing.

    Attributes:
        logger: Instância do logger padrão do Python
        base_context: Contexto fixo incluído em toda linha (ex.: componente)
    """

    def __init__(self, name: str = APP_LOGGER_NAME, **base_context: Any):
        """Inicializa o logger estruturado.

        Args:
            name: Nome do logger (padrão: logger da aplicação)
            **base_context: Contexto fixo anexado a cada mensagem
        """
        self.logger = logging.getLogger(name)
        self.base_context: Dict[str, Any] = dict(base_context)

    def build_entry(self, level: str, message: str, **context: Any) -> Dict[str, Any]:
        merged: Dict[str, Any] = {**self.base_context, **context}
        return {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level.upper(),
            'message': message,
            'context': merged,
        }

    def log(self, level: str, message: str, **context: Any) -> None:
        """Registra uma mensagem de log estruturada em formato JSON.

        Args:
            level: Nível do log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Mensagem principal do log
            **context: Contexto adicional como keyword arguments

        Example:
            >>> logger = StructuredLogger(component='parsing')
            >>> logger.log('info', 'parse_completed', kind='status', entries=8)
        """
        log_level = getattr(logging, level.upper(), logging.INFO)
        if not self.logger.isEnabledFor(log_level):
            return
        entry = self.build_entry(level, message, **context)
        self.logger.log(log_level, json.dumps(entry, ensure_ascii=False, default=str))

    def debug(self, message: str, **context: Any) -> None:
        self.log('debug', message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log('info', message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log('warning', message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log('error', message, **context)


def get_structured_logger(component: Optional[str] = None) -> StructuredLogger:
    if component:
        return StructuredLogger(APP_LOGGER_NAME, component=component)
    return StructuredLogger(APP_LOGGER_NAME)
