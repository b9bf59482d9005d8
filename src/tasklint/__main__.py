"""Allow ``python -m tasklint``."""

from tasklint.cli import main

main()
