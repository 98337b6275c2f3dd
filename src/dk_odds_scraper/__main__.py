"""Allow ``python -m dk_odds_scraper``."""

import sys

from .cli import main

sys.exit(main())
