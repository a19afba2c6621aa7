"""Atajo de desarrollo: `python -m main tasks` desde la raíz del repo.

Sin `pip install -e .` los paquetes de `src/` (core, adapters, cli) no están
en el path; este módulo los añade y delega en la app de typer.
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(_SRC) not in sys.path:
        sys.path.insert(0, str(_SRC))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
