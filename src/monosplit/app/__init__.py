from .runner import MigrateRunner, make_hooks

__all__ = ["MigrateRunner", "make_hooks"]
