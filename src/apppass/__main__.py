"""Allow ``python -m apppass`` to behave like the ``apppass`` script."""

from apppass.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
