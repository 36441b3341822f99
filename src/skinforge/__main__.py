"""Allow ``python -m skinforge``."""

import sys

from skinforge.app import main

sys.exit(main())
