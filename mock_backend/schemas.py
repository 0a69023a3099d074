from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict
from typing import List, Optional

# Request bodies accept the city reference as either "city_id" or "city".
CITY_ALIASES = AliasChoices("city_id", "city")


class TokenRequest(BaseModel):
    role: Optional[str] = None


class TokenRead(BaseModel):
    token: str


class CityCreate(BaseModel):
    name: Optional[str] = None
    country: Optional[str] = None


class CityRead(BaseModel):
    id: int
    name: str
    country: str

    model_config = ConfigDict(from_attributes=True)


class UserFields(BaseModel):
    """User attributes as sent by clients; presence is checked by the store."""

    name: Optional[str] = None
    city_id: Optional[int] = Field(default=None, validation_alias=CITY_ALIASES)
    phone: Optional[str] = None
    email: Optional[str] = None
    registration_date: Optional[str] = None
    balance: Optional[int] = None


class UserPatch(BaseModel):
    city_id: Optional[int] = Field(default=None, validation_alias=CITY_ALIASES)
    phone: Optional[str] = None


class UserCity(BaseModel):
    city_id: Optional[int] = Field(default=None, validation_alias=CITY_ALIASES)


class UserRead(BaseModel):
    id: int
    name: str
    city_id: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    registration_date: Optional[str] = None
    balance: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    item: Optional[str] = None
    amount: Optional[int] = None
    date: Optional[str] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None


class OrderRead(BaseModel):
    id: int
    item: Optional[str] = None
    amount: Optional[int] = None
    date: Optional[str] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderList(BaseModel):
    orders: List[OrderRead] = []


class OrderCreated(BaseModel):
    message: str
    order_id: int


class Message(BaseModel):
    message: str


class UploadResult(BaseModel):
    message: str
    filename: str


class Base64Upload(BaseModel):
    image_base64: Optional[str] = None


class CompanyInfo(BaseModel):
    name: str
    address: str
    phone: str
    working_hours: str
