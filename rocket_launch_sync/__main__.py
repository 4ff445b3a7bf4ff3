"""Allow ``python -m rocket_launch_sync``."""

import sys

from .cli import main

sys.exit(main())
