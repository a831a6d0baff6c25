import sys

from acl_sweep.cli import main

sys.exit(main())
