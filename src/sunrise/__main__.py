"""Module entrypoint.

Allows:
    python -m sunrise
"""

from __future__ import annotations

from sunrise.cli import main

if __name__ == "__main__":
    main()
