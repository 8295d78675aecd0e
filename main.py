import sys

from img_indexer.cli import main

if __name__ == "__main__":
    sys.exit(main())
