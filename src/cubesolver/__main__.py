import sys

from cubesolver.cli import main

sys.exit(main())
