import sys

from irrigsim.cli import main

sys.exit(main())
