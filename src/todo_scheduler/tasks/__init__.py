"""
Task subsystem.

Components:
- rules.py: repeat-rule parser (Daily / Weekly / Monthly / Yearly)
- recurrence.py: next-occurrence calculator + YYYYMMDD helpers
- task_models.py: data structures (Task)
- task_store.py: SQLite-backed storage
- task_service.py: task lifecycle (validate, normalize date, create/edit/complete)
- task_api.py: small high-level helpers used by the HTTP connector
"""
