import sys

from convention_check.cli import main

sys.exit(main())
