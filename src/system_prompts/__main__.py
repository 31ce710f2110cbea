"""Allow ``python -m system_prompts`` to run the CLI."""

import sys

from system_prompts.cli import main

sys.exit(main())
