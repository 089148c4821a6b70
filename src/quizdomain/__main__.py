"""Allow ``python -m quizdomain``."""

import sys

from quizdomain.cli import main

sys.exit(main())
