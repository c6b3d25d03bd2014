"""Allow ``python -m accelsend``."""

from accelsend.cli.main import main


if __name__ == "__main__":
    main()
