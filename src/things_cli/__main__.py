from __future__ import annotations

from things_cli.commands import main

if __name__ == "__main__":
    raise SystemExit(main())
