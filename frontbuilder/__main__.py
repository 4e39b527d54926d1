"""
Entry point for running frontbuilder as a module: python -m frontbuilder
"""

import sys

from frontbuilder.build.orchestrator import main

if __name__ == "__main__":
    sys.exit(main())
