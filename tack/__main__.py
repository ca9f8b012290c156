import sys

from tack.cli import main

sys.exit(main())
