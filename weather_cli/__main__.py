import sys

from weather_cli.cli import main

sys.exit(main())
