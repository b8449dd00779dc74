import sys

from lambdacore.main import main

sys.exit(main())
