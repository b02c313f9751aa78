"""Allow ``python -m alias_engine``."""

import sys

from .cli import main

sys.exit(main())
