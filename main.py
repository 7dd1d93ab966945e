"""Entry point for running docker-lsf from a source checkout."""

import sys

from docker_lsf.main import main

if __name__ == "__main__":
    sys.exit(main())
