import argparse
import getpass

from medsales.core.config import settings
from medsales.core.database import SessionLocal, init_db
from medsales.core.exceptions import ValidationError
from medsales.core.logger import logger
from medsales.models.user import User, UserRole


def serve() -> None:
    import uvicorn

    uvicorn.run(
        "medsales:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        workers=settings.WORKERS_COUNT if settings.is_production else 1,
        log_level=settings.LOG_LEVEL.lower(),
    )


def create_user(username: str, role: str) -> None:
    """Create a console account, prompting for its password"""
    password = getpass.getpass(f"Password for {username}: ")
    if len(password) < 8:
        raise SystemExit("Password must be at least 8 characters")

    init_db()
    db = SessionLocal()
    try:
        if User.get(db, username=username):
            raise SystemExit(f"User {username} already exists")
        try:
            User.ensure(db, username, password, UserRole(role))
        except ValidationError as e:
            raise SystemExit(e.message)
        logger.info(f"Created {role} account {username}")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Medical Sales API")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("serve", help="Run the API server (default)")
    user_parser = commands.add_parser("create-user", help="Create a console account")
    user_parser.add_argument("username")
    user_parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.editor.value,
    )
    args = parser.parse_args()

    if args.command == "create-user":
        create_user(args.username, args.role)
    else:
        serve()
