"""
Main entry point for OntoAbstract.

    python -m ontoabstract project.json --diagram d1 --rule parthood
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
