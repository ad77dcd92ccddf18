import sys

from uonum.cli import main

sys.exit(main())
