"""Allow ``python -m cachedemo.cli`` execution."""

import sys

from cachedemo.cli.demo import main

sys.exit(main())
