"""Allow ``python -m zdotgen``."""

import sys

from zdotgen.cli import main

sys.exit(main())
