"""Allow `python -m aicommit`."""

import sys

from aicommit.cli.main import main

sys.exit(main())
