import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, File, Header, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import crud, schemas
from .auth import admin_claims, current_claims, issue_token
from .config import settings
from .db import SessionLocal, get_db, init_db
from .errors import ApiError, BadUpload, MissingField, PayloadTooLarge
from .seed import seed_users
from .storage import FileStore

logger = logging.getLogger(__name__)

COMPANY_INFO = {
    "name": "Test Company LLC",
    "address": "10 Example Street, Moscow",
    "phone": "+7 900 123 45 67",
    "working_hours": "Mon-Fri 9:00 - 18:00",
}

file_store = FileStore(settings.upload_dir)


def get_file_store() -> FileStore:
    return file_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("database ready at %s", settings.database_url)
    with SessionLocal() as db:
        seed_users(db, floor=settings.seed_floor)
    yield


logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="Mock Test Backend API",
    version="1.0.0",
    description="CRUD over users, orders and cities for exercising API clients. "
                "The OpenAPI document is also served at /swagger.json.",
    lifespan=lifespan,
)


# -------------------- Error rendering --------------------

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location}: {first.get('msg')}"
    else:
        message = "Invalid request"
    return error_response(400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, str(exc))


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    length = request.headers.get("content-length")
    if length and length.isdigit() and int(length) > settings.max_body_bytes:
        exc = PayloadTooLarge()
        return error_response(exc.status_code, exc.message)
    return await call_next(request)


# -------------------- Auth --------------------

@app.post("/auth/token", response_model=schemas.TokenRead)
async def create_token(payload: schemas.TokenRequest):
    return {"token": issue_token(payload.role)}


# -------------------- Users --------------------

@app.get("/users", response_model=List[schemas.UserRead], dependencies=[Depends(current_claims)])
async def get_users(db: Session = Depends(get_db)):
    return crud.list_users(db)


@app.post("/users", response_model=schemas.UserRead, dependencies=[Depends(current_claims)])
async def create_user(user: schemas.UserFields, db: Session = Depends(get_db)):
    return crud.create_user(db, user)


@app.put("/users/{user_id}", response_model=schemas.Message, dependencies=[Depends(current_claims)])
async def replace_user(user_id: int, user: schemas.UserFields, db: Session = Depends(get_db)):
    crud.replace_user(db, user_id, user)
    return {"message": "User information fully updated"}


@app.patch("/users/{user_id}", response_model=schemas.Message, dependencies=[Depends(current_claims)])
async def patch_user(user_id: int, patch: schemas.UserPatch, db: Session = Depends(get_db)):
    crud.patch_user(db, user_id, patch)
    return {"message": "User data updated successfully"}


@app.delete("/users/{user_id}", response_model=schemas.Message, dependencies=[Depends(admin_claims)])
async def delete_user(user_id: int, db: Session = Depends(get_db)):
    crud.delete_user(db, user_id)
    return {"message": "User deleted successfully"}


@app.put("/users/{user_id}/city", response_model=schemas.Message, dependencies=[Depends(current_claims)])
async def update_user_city(user_id: int, payload: schemas.UserCity, db: Session = Depends(get_db)):
    crud.set_user_city(db, user_id, payload.city_id)
    return {"message": "User city updated successfully"}


# -------------------- Orders --------------------

@app.get("/users/{user_id}/orders", response_model=schemas.OrderList, dependencies=[Depends(current_claims)])
async def get_user_orders(user_id: int, db: Session = Depends(get_db)):
    return {"orders": crud.list_orders_for_user(db, user_id)}


@app.post("/users/{user_id}/orders", response_model=schemas.OrderCreated, dependencies=[Depends(current_claims)])
async def create_user_order(user_id: int, order: schemas.OrderCreate, db: Session = Depends(get_db)):
    created = crud.create_order(db, user_id, order)
    return {"message": "Order created successfully", "order_id": created.id}


# -------------------- Cities --------------------

@app.post("/cities", response_model=schemas.CityRead, dependencies=[Depends(current_claims)])
async def create_city(city: schemas.CityCreate, db: Session = Depends(get_db)):
    return crud.create_city(db, city)


# -------------------- Misc --------------------

@app.get("/company-info", response_model=schemas.CompanyInfo)
async def company_info():
    return COMPANY_INFO


@app.get("/secure-endpoint", response_model=schemas.Message, dependencies=[Depends(current_claims)])
async def secure_endpoint(x_custom_header: str | None = Header(default=None)):
    if x_custom_header is None:
        raise MissingField("Missing required header: X-Custom-Header")
    return {"message": "Request completed successfully"}


@app.get("/error")
async def always_fails():
    """Diagnostic route: always answers 500."""
    raise RuntimeError("Test server error!")


@app.get("/swagger.json", include_in_schema=False)
async def swagger_json():
    return app.openapi()


# -------------------- Files --------------------

@app.post("/upload", response_model=schemas.UploadResult, dependencies=[Depends(current_claims)])
async def upload_file(file: UploadFile | None = File(default=None), store: FileStore = Depends(get_file_store)):
    if file is None:
        raise BadUpload()
    filename = store.save_upload(file.content_type, file.filename, file.file)
    return {"message": "File uploaded successfully", "filename": filename}


@app.post("/upload-base64", response_model=schemas.UploadResult, dependencies=[Depends(current_claims)])
async def upload_base64(payload: schemas.Base64Upload, store: FileStore = Depends(get_file_store)):
    filename = store.save_base64(payload.image_base64)
    return {"message": "File uploaded successfully", "filename": filename}


@app.get("/uploads/{filename}")
async def get_upload(filename: str, store: FileStore = Depends(get_file_store)):
    return FileResponse(store.resolve(filename))
