"""Allow running as ``python -m mapsmi``."""

import sys

from mapsmi.cli import main

sys.exit(main())
