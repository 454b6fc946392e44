import sys

from sudoku.cli.launcher import main

sys.exit(main())
