import sys

from cFish.cli import main

sys.exit(main())
