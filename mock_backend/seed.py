"""Demo data: keep at least ``floor`` users in the store.

Seeded users point at city ids 1..5 whether or not those cities exist; cities
themselves are never seeded.
"""
import logging
import random
from typing import Optional

from faker import Faker
from sqlalchemy.orm import Session

from . import crud, models

logger = logging.getLogger(__name__)

CITY_ID_RANGE = (1, 5)
BALANCE_RANGE = (1000, 50000)


def fake_user(fake: Faker) -> models.User:
    return models.User(
        name=fake.name(),
        city_id=random.randint(*CITY_ID_RANGE),
        phone=fake.phone_number(),
        email=fake.email(),
        registration_date=fake.date_between(start_date="-1y", end_date="-1d").isoformat(),
        balance=random.randint(*BALANCE_RANGE),
    )


def seed_users(db: Session, floor: int = 20, fake: Optional[Faker] = None) -> int:
    """Top the users table up to ``floor`` rows. Returns how many were added."""
    existing = crud.count_users(db)
    missing = floor - existing
    if missing <= 0:
        return 0
    fake = fake or Faker()
    db.add_all([fake_user(fake) for _ in range(missing)])
    crud.commit(db)
    logger.info("seeded %d users (had %d)", missing, existing)
    return missing
