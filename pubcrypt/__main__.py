import sys

from pubcrypt.main import main

sys.exit(main())
