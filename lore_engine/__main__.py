import sys

from lore_engine.main import main

sys.exit(main())
