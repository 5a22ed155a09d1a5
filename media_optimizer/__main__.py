"""Allow ``python -m media_optimizer``."""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
