"""Allow ``python -m bindata``."""

from .cli import main

main()
