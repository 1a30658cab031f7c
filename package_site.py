"""Drop-in launcher: copy into a project root and run `python package_site.py`.

The archive lands next to the project folder. This file is skipped when a
static project is copied.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
    from site_packager.cli import main as cli_main

    return int(cli_main(sys.argv[1:], script_name=Path(__file__).name))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
