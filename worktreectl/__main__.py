"""Allow running worktreectl with python -m worktreectl."""

import sys

from worktreectl.cli import main

sys.exit(main())
