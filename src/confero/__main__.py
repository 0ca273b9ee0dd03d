import sys

from confero.app.cli import main

sys.exit(main())
