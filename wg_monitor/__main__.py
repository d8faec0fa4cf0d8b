import sys

from wg_monitor.handler import main

sys.exit(main())
