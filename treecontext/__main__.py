import sys

from treecontext.cli import main

sys.exit(main())
