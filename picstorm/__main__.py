import sys

from picstorm.main import run

sys.exit(run())
