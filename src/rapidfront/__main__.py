"""Allow ``python -m rapidfront``."""

from rapidfront.app import main

main()
