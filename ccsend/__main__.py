import sys

from ccsend.cli import main

sys.exit(main())
