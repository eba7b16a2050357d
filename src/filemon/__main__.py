"""Allow `python -m filemon`."""

from filemon.cli import main

if __name__ == "__main__":
    main()
