"""Insert sign-in users into the Postgres credential store.

Usage:
    python -m scripts.seed_users                       # admin/passadmin, khhini/passkhhini
    python -m scripts.seed_users <username> <password> [<username> <password> ...]
Existing usernames are skipped. All imports use app.*.
"""

import asyncio
import sys

from app.application.services.seed_service import DEFAULT_USERS, seed_users
from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import UserRepository
from app.shared.telemetry import setup_logging


def _parse_args(argv: list[str]) -> dict[str, str]:
    if not argv:
        return dict(DEFAULT_USERS)
    if len(argv) % 2:
        print(
            "Usage: python -m scripts.seed_users [<username> <password> ...]",
            file=sys.stderr,
        )
        sys.exit(1)
    return dict(zip(argv[::2], argv[1::2]))


async def main() -> None:
    """Create users; passwords are stored as bcrypt hashes."""
    users = _parse_args(sys.argv[1:])
    settings = get_settings()
    setup_logging()
    if settings.database_backend != "postgres":
        print("DATABASE_BACKEND must be 'postgres' to seed users", file=sys.stderr)
        sys.exit(1)
    if settings.database_create_tables:
        await database.create_tables()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)
    try:
        async with database.AsyncSessionLocal() as session:
            created = await seed_users(UserRepository(session), users)
    finally:
        await database.dispose_engine()
    print(f"Created {len(created)} user(s): {', '.join(created) or '-'}")


if __name__ == "__main__":
    asyncio.run(main())
