import sys

from timeweather.cli import main

sys.exit(main())
