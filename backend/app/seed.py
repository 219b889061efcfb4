"""Seed the database with demo users.

Usage:
    python -m app.seed --count 10
"""
import argparse
import logging
import random

from app.database import SessionLocal
from app.errors import ConstraintViolationError
from app.services.auth_service import register_user

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"

FIRST_NAMES = ["Ann", "Ben", "Carla", "David", "Elif", "Farah", "Gus", "Hana", "Ivan", "Jules"]
LAST_NAMES = ["Lee", "Moreau", "Nakamura", "Okafor", "Petrov", "Quinn", "Rossi", "Silva"]


def seed_users(db, count: int, rng: random.Random | None = None) -> list:
    """Register ``count`` users with random names; colliding names get suffixed slugs."""
    rng = rng or random.Random()
    created = []
    for i in range(count):
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        email = f"{first}.{last}.{i}.{rng.randrange(10**6)}@example.com".lower()
        try:
            user = register_user(db, first, last, email, DEFAULT_PASSWORD)
        except ConstraintViolationError as exc:
            logger.warning("Skipped %s: %s", email, exc.message)
            continue
        created.append(user)
        logger.info("Created user: %s %s (%s)", first, last, email)
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Create demo users")
    parser.add_argument("--count", type=int, default=10)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        users = seed_users(db, args.count)
    finally:
        db.close()
    logger.info("Seeding complete: %d users", len(users))


if __name__ == "__main__":
    main()
