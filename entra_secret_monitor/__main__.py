"""Allow running the exporter with ``python -m entra_secret_monitor``."""

import sys

from .main import main

sys.exit(main())
