"""tasklint: consistency checks for tasks.jsonl indices and their task files."""

__version__ = "1.0.0"
