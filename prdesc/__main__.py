# PYTHON_ARGCOMPLETE_OK
"""Allow `python -m prdesc`."""

import sys

from prdesc.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
