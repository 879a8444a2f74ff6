"""Allow running as ``python -m id3_tagger``."""

import sys

from id3_tagger.main import main

sys.exit(main())
