import sys

from cartoon_studio.cli import main

if __name__ == "__main__":
    sys.exit(main())
