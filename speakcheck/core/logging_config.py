"""
Конфигурация логирования для приложения.
"""
import logging
import sys
import json
from contextvars import ContextVar
from pathlib import Path
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

import coloredlogs

# Контекст для Request ID (выставляется middleware в main.py)
request_id_var: ContextVar[str] = ContextVar('request_id', default='')


def get_request_id() -> str:
    """Получить текущий Request ID"""
    return request_id_var.get()


class RequestIdFilter(logging.Filter):
    """Добавляет request_id из контекста запроса в каждую запись"""

    def filter(self, record):
        if not getattr(record, 'request_id', None):
            record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """
    Пользовательский форматер для JSON логов.
    Преобразует логи в JSON для машинной обработки.
    """
    def format(self, record):
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if getattr(record, 'request_id', None):
            log_obj["request_id"] = record.request_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    json_logs: bool = True
):
    """
    Настраивает логирование для приложения.

    Args:
        log_level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Путь к файлу для записи логов (опционально)
        max_file_size: Максимальный размер файла лога
        backup_count: Количество резервных копий
        json_logs: Использовать JSON форматирование для файла логов
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Форматер для консоли (с цветами)
    console_formatter = coloredlogs.ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
        field_styles={
            'asctime': {'color': 'green'},
            'name': {'color': 'blue'},
            'levelname': {'color': 'magenta', 'bold': True},
        }
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    request_id_filter = RequestIdFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(numeric_level)
    console_handler.addFilter(request_id_filter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        )

        if json_logs:
            file_handler.setFormatter(JSONFormatter())
        else:
            text_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(text_formatter)

        file_handler.setLevel(numeric_level)
        file_handler.addFilter(request_id_filter)
        root_logger.addHandler(file_handler)

    # Настраиваем логирование для библиотек
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    root_logger.info(f"Logging configured with level: {log_level}")
    if log_file:
        root_logger.info(f"Logs will be written to: {log_file} (max {max_file_size//1024//1024}MB)")
