import sys

from wikipaths.cli import main

sys.exit(main())
