# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
ENV_VARS below lists every variable Settings.from_env() reads.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-scheduler).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO).",
    # HTTP
    "TODO_HOST": "Listen address (default: 0.0.0.0).",
    "TODO_PORT": "Listen port, '7540' or ':7540' (default: 7540).",
    "TODO_WEB_DIR": "Static web UI directory served at / (default: web).",
    # Storage
    "TODO_DBFILE": "SQLite database file (default: scheduler.db).",
    "TODO_TASKS_LIMIT": "Max tasks returned by GET /api/tasks (default: 10).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for logs (default: .local/todo).",
}
