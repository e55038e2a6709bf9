"""todo-scheduler: a small task tracker with recurring tasks."""

__version__ = "0.1.0"
