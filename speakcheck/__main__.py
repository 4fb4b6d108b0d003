"""
Запуск сервера: python -m speakcheck
"""
import sys

import uvicorn

from speakcheck.core.config import settings


def main():
    uvicorn.run(
        "speakcheck.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
