"""
Logging estruturado e telemetria
"""

import logging
import re
from logging.handlers import RotatingFileHandler

from pythonjsonlogger import jsonlogger

from core.config import settings

# Padrões de secrets para redação
SECRET_PATTERNS = [
    re.compile(r"key=[^&\s\]]+"),  # Chave de assinatura em strings assinadas
    re.compile(r"[A-Za-z0-9_\-]{32,}"),  # Chaves genéricas longas
]


class RedactSecrets(logging.Filter):
    """Filtro para remover secrets dos logs"""

    def filter(self, record):
        if isinstance(record.msg, str):
            for pattern in SECRET_PATTERNS:
                record.msg = pattern.sub("[REDACTED]", record.msg)
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Formatter JSON customizado"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["service"] = "wechatpay-client"
        log_record["logger"] = record.name


# Configuração do logger
logger = logging.getLogger("wechatpay")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

# Handler para console (stdout)
console_handler = logging.StreamHandler()
console_handler.setFormatter(CustomJsonFormatter())
console_handler.addFilter(RedactSecrets())
logger.addHandler(console_handler)

# Handler para arquivo, só quando LOG_FILE está definido
if settings.LOG_FILE:
    file_handler = RotatingFileHandler(
        settings.LOG_FILE,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setFormatter(CustomJsonFormatter())
    file_handler.addFilter(RedactSecrets())
    logger.addHandler(file_handler)
