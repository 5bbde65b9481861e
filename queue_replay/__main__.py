import sys

from queue_replay.cli import main

sys.exit(main())
