"""Command-line interface: `python -m twinparadox`."""
from twinparadox.main import main

if __name__ == "__main__":
    main()
