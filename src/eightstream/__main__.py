import sys

from eightstream.cli import main

sys.exit(main())
