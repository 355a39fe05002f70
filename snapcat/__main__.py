import sys

from snapcat.cli import main

sys.exit(main())
