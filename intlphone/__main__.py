"""Allow ``python -m intlphone``."""

import sys

from intlphone.cli import main

sys.exit(main())
