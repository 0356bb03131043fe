#!/usr/bin/env python3
"""Seed a super-admin account.

Usage:
    python scripts/create_super_admin.py <username> <display_name>

The password is read from the WHISPER_ADMIN_PASSWORD environment variable
or prompted for.
"""

import argparse
import asyncio
import getpass
import os
import sys

import logfire

from whisper.config import Settings
from whisper.domain.error import DomainError
from whisper.domain.service import IdentityService
from whisper.domain.value.types import Username
from whisper.util.di.container import create_container
from whisper.util.observability import configure_logfire


async def create_super_admin(username: str, display_name: str, password: str) -> None:
    container = create_container()
    try:
        # The request scope commits the session on exit
        async with container() as request_container:
            identity_service = await request_container.get(IdentityService)
            admin = await identity_service.bootstrap_super_admin(
                Username.parse(username), password, display_name
            )
        logfire.info("Super-admin created", admin_id=str(admin.id))
    finally:
        await container.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Whisper super-admin")
    parser.add_argument("username")
    parser.add_argument("display_name")
    args = parser.parse_args()

    configure_logfire(Settings())

    password = os.environ.get("WHISPER_ADMIN_PASSWORD") or getpass.getpass()
    try:
        asyncio.run(create_super_admin(args.username, args.display_name, password))
    except DomainError as e:
        logfire.error("Super-admin creation failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
