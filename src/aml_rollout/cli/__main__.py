"""Module entrypoint for ``python -m aml_rollout.cli``."""

from __future__ import annotations

from .main import main

if __name__ == "__main__":  # pragma: no cover
    main()
