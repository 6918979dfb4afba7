import sys

from digrams.cli import main

sys.exit(main())
