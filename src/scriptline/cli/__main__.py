"""Allow ``python -m scriptline.cli``."""

from scriptline.cli.main import main

if __name__ == "__main__":
    main()
