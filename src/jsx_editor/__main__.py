"""
Entry point for module execution (``python -m jsx_editor``).

This module delegates execution to the CLI handler in ``jsx_editor.cli.__main__``.
"""

import sys
from jsx_editor.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
