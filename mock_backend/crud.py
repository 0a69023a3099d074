import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import MissingField, StoreError

logger = logging.getLogger(__name__)

# Fields a full replace must carry, in column order.
USER_FIELDS = ("name", "city_id", "phone", "email", "registration_date", "balance")


def is_missing(value) -> bool:
    return value is None or value == ""


def commit(db: Session):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("store write failed: %s", e)
        raise StoreError(str(e)) from e


def run_query(fn):
    try:
        return fn()
    except SQLAlchemyError as e:
        logger.error("store query failed: %s", e)
        raise StoreError(str(e)) from e


def create_city(db: Session, city: schemas.CityCreate) -> models.City:
    if is_missing(city.name) or is_missing(city.country):
        raise MissingField("Both 'name' and 'country' are required")
    db_city = models.City(name=city.name, country=city.country)
    db.add(db_city)
    commit(db)
    db.refresh(db_city)
    return db_city


def list_users(db: Session) -> List[models.User]:
    return run_query(lambda: db.query(models.User).order_by(models.User.id).all())


def count_users(db: Session) -> int:
    return run_query(lambda: db.query(models.User).count())


def create_user(db: Session, user: schemas.UserFields) -> models.User:
    if is_missing(user.name):
        raise MissingField("Field 'name' is required")
    db_user = models.User(**{f: getattr(user, f) for f in USER_FIELDS})
    db.add(db_user)
    commit(db)
    db.refresh(db_user)
    return db_user


def get_user(db: Session, user_id: int) -> models.User | None:
    return run_query(lambda: db.get(models.User, user_id))


def replace_user(db: Session, user_id: int, user: schemas.UserFields) -> None:
    missing = [f for f in USER_FIELDS if is_missing(getattr(user, f))]
    if missing:
        raise MissingField("All fields must be provided, missing: " + ", ".join(missing))
    # Zero matched rows is not an error.
    run_query(lambda: db.query(models.User)
           .filter(models.User.id == user_id)
           .update({f: getattr(user, f) for f in USER_FIELDS}))
    commit(db)


def patch_user(db: Session, user_id: int, patch: schemas.UserPatch) -> None:
    if is_missing(patch.city_id) and is_missing(patch.phone):
        raise MissingField("At least one of 'city' or 'phone' must be provided")
    user = get_user(db, user_id)
    if not user:
        return
    # merge only the supplied fields onto the stored record
    if not is_missing(patch.city_id):
        user.city_id = patch.city_id
    if not is_missing(patch.phone):
        user.phone = patch.phone
    commit(db)


def set_user_city(db: Session, user_id: int, city_id: int | None) -> None:
    if is_missing(city_id):
        raise MissingField("City ID is required")
    run_query(lambda: db.query(models.User)
           .filter(models.User.id == user_id)
           .update({"city_id": city_id}))
    commit(db)


def delete_user(db: Session, user_id: int) -> None:
    # idempotent: deleting an absent id matches zero rows
    run_query(lambda: db.query(models.User).filter(models.User.id == user_id).delete())
    commit(db)


def list_orders_for_user(db: Session, user_id: int) -> List[models.Order]:
    return run_query(lambda: db.query(models.Order)
                  .filter(models.Order.user_id == user_id)
                  .order_by(models.Order.id)
                  .all())


def create_order(db: Session, user_id: int, order: schemas.OrderCreate) -> models.Order:
    # user_id is not checked against the users table
    db_order = models.Order(
        user_id=user_id,
        item=order.item,
        amount=order.amount,
        date=order.date,
        payment_method=order.payment_method,
        status=order.status,
    )
    db.add(db_order)
    commit(db)
    db.refresh(db_order)
    return db_order
