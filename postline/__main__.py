import sys

from postline.cli import main

sys.exit(main())
