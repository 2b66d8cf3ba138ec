import sys

from pingboard.cli import main

sys.exit(main())
