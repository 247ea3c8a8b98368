import sys

from meetup_weather.cli import main

sys.exit(main())
