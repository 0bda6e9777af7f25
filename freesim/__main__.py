import sys

from freesim.cli import main

sys.exit(main())
