"""Run or create users-table migrations.

Usage:
    python scripts/migrate.py                 upgrade to head
    python scripts/migrate.py down [rev]      downgrade (default: one step)
    python scripts/migrate.py create <msg>    autogenerate a revision
"""

import sys

from alembic import command
from alembic.config import Config

ALEMBIC_INI = "alembic.ini"


def _run(action: str, func, *args, **kwargs) -> None:
    try:
        print(f"{action}...")
        func(Config(ALEMBIC_INI), *args, **kwargs)
        print(f"✓ {action} completed successfully!")
    except Exception as e:
        print(f"✗ {action} failed: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str]) -> None:
    if not argv:
        _run("Upgrading to head", command.upgrade, "head")
    elif argv[0] == "down":
        _run("Downgrading", command.downgrade, argv[1] if len(argv) > 1 else "-1")
    elif argv[0] == "create" and len(argv) > 1:
        _run("Creating migration", command.revision, message=" ".join(argv[1:]), autogenerate=True)
    else:
        print(__doc__)
        sys.exit(2)


if __name__ == "__main__":
    main(sys.argv[1:])
