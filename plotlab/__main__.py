import sys

from plotlab.cli import main

sys.exit(main())
