"""core package initialization.

Making `core` an explicit package so imports like `import core.board`
work reliably when running `main.py` from the project root.
"""

__all__ = ["app", "board", "catalog", "constants", "events", "save", "scene", "tuning"]
