"""
Script to create a user with a password for local testing and print a token.

Usage:
    python -m app.scripts.create_local_user --email dev@example.com --name Dev --password secret
"""

import argparse
import asyncio

from app.core.auth import issue_token
from app.core.database import engine, get_session_context, init_db
from app.services.users import get_user_by_email, register_user
from taskhub_shared.schemas.users import RegisterRequest


async def create_user(email: str, name: str, password: str, create_tables: bool = False) -> str:
    if create_tables:
        await init_db()

    async with get_session_context() as session:
        user = await get_user_by_email(email, session)
        if user is None:
            user = await register_user(
                RegisterRequest(email=email, name=name, password=password), session
            )
            print(f"Created user: {email} (id={user.id})")
        else:
            print(f"User {email} already exists (id={user.id}).")
        user_id = user.id

    await engine.dispose()
    return issue_token(user_id)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a local user and print a bearer token.")
    parser.add_argument("--email", required=True, help="Email address for the user")
    parser.add_argument("--name", default="Local User", help="Display name")
    parser.add_argument("--password", required=True, help="Password for the user")
    parser.add_argument(
        "--create-tables", action="store_true", help="Create missing tables first"
    )

    args = parser.parse_args()

    token = asyncio.run(create_user(args.email, args.name, args.password, args.create_tables))
    print(token)
