"""
Allow ``python -m cli command [args...]``.
"""

import sys

from cli.main import main

sys.exit(main())
