import sys

from dtoracle.oracle import main

sys.exit(main())
