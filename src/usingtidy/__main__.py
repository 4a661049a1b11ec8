import sys

from usingtidy.cli import main

sys.exit(main())
