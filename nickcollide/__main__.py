#!/usr/bin/env python3
"""Allow ``python -m nickcollide``."""

import sys

from nickcollide.cli import main

sys.exit(main())
