from sqlalchemy import Column, Integer, String, ForeignKey
from .db import Base


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    country = Column(String, nullable=False)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # may point at a city that was never created (seed data does this)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    registration_date = Column(String, nullable=True)
    balance = Column(Integer, nullable=True)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    item = Column(String, nullable=True)
    amount = Column(Integer, nullable=True)
    date = Column(String, nullable=True)
    payment_method = Column(String, nullable=True)
    status = Column(String, nullable=True)
