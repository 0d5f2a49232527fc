"""
Script to register an instructor and print a bearer token for them.
Run this after setting up the database and running migrations.

Usage:
    python scripts/create_instructor.py
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from attendance_engine.db import base  # noqa: F401  (registers every table)
from attendance_engine.db.session import async_session_factory
from attendance_engine.models.instructor import Instructor
from attendance_engine.core.security import create_access_token


async def create_instructor():
    """Link an identity-provider user id to a new instructor record."""
    async with async_session_factory() as session:
        print("Registering an instructor...")
        user_id = input("Identity provider user id: ").strip()
        name = input("Instructor name: ").strip()

        if not all([user_id, name]):
            print("Error: All fields are required.")
            return

        result = await session.execute(
            select(Instructor).where(Instructor.user_id == user_id)
        )
        if result.scalar_one_or_none():
            print(f"Error: An instructor is already linked to user {user_id}.")
            return

        instructor = Instructor(user_id=user_id, name=name)
        session.add(instructor)
        await session.commit()
        await session.refresh(instructor)

        print(f"Instructor #{instructor.id} created: {name}")
        print(f"Bearer token: {create_access_token(subject=user_id)}")


if __name__ == "__main__":
    asyncio.run(create_instructor())
