"""Script de ejecución de medusa-sync.

Por qué existe:
- Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo.
- El script instalado (`medusa-sync`) apunta a `cli.main:run`; este módulo solo lo envuelve.
"""

from __future__ import annotations

import sys

# Las tablas Rich y los volcados de debug no son ASCII; cp1252 rompe en Windows.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402


def main() -> None:
    run()


if __name__ == "__main__":
    main()
