"""
Чистый анализ речи (fillers, scoring, analyzer) и внешние сервисы
(transcriber, pipeline, rate_limiter).

Модули анализа не зависят от настроек и могут импортироваться отдельно.
"""
