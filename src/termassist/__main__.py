"""Allow ``python -m termassist``."""

from termassist.cli import main

if __name__ == "__main__":
    main()
