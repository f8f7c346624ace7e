"""
Currico - Admin Seller Verification Script

Grants or revokes the verified-seller badge from the command line, for
support cases handled outside the admin dashboard. A manual grant is never
auto-revoked by the level engine.

Usage:
    python scripts/verify_seller.py grant  --user-id 3f1c...
    python scripts/verify_seller.py revoke --user-id 3f1c...
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import uuid

# Resolve project root so this script can be run from any working directory
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from currico.database import create_db_engine
from currico.errors import CurricoError
from currico.models.user import User
from currico.services.notifications import NotificationService
from currico.services.verification import grant_manual_verification, revoke_verification


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Grant or revoke the Currico verified-seller badge.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/verify_seller.py grant --user-id 3f1c2d9e-6a0b-4c55-9a57-1f1f0c3b2a10
  python scripts/verify_seller.py revoke --user-id 3f1c2d9e-6a0b-4c55-9a57-1f1f0c3b2a10
  python scripts/verify_seller.py grant --user-id ... --no-notify
""",
    )
    parser.add_argument(
        "action",
        choices=("grant", "revoke"),
        help="grant = manual verification, revoke = remove any verification.",
    )
    parser.add_argument(
        "--user-id",
        type=uuid.UUID,
        required=True,
        help="UUID of the seller account.",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Do not create the in-app notification on grant.",
    )
    return parser.parse_args(argv)


async def apply(action: str, user_id: uuid.UUID, notify: bool = True) -> User:
    engine, session_factory = create_db_engine()
    try:
        async with session_factory() as session:
            if action == "grant":
                user = await grant_manual_verification(session, user_id)
            else:
                user = await revoke_verification(session, user_id)

        if action == "grant" and notify:
            await NotificationService(session_factory).notify_manual_verification(user_id)
        return user
    finally:
        await engine.dispose()


async def main() -> None:
    args = parse_args()

    print(f"Applying '{args.action}' to user {args.user_id}")

    try:
        user = await apply(args.action, args.user_id, notify=not args.no_notify)
    except CurricoError as e:
        print(f"Refused: {e.message}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        print(f"Failed to update verification: {e}", file=sys.stderr)
        sys.exit(1)

    print("Verification updated.")
    print(f"  users.id                = {user.id}")
    print(f"  is_verified_seller      = {user.is_verified_seller}")
    print(f"  verified_seller_method  = {user.verified_seller_method}")
    print(f"  verified_seller_at      = {user.verified_seller_at}")


if __name__ == "__main__":
    asyncio.run(main())
