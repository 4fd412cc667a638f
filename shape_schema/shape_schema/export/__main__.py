"""Module entrypoint for `python -m shape_schema.export`.

Delegates to the export CLI implementation.
"""

import sys

from .run_export import main


if __name__ == "__main__":
    sys.exit(main())
