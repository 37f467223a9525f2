from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import Field, TypeAdapter, ValidationError
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from rent_service.adapter.services.clock import SystemClock
from rent_service.adapter.services.database import create_engine
from rent_service.adapter.services.object_storage import LocalObjectStorage, S3ObjectStorage
from rent_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from rent_service.api.utils.jwt import verify_jwt
from rent_service.app.services.clock import Clock
from rent_service.app.services.object_storage import ObjectStorage
from rent_service.domain.actors import Actor

engine = create_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

_actor_adapter = TypeAdapter(Annotated[Actor, Field(discriminator="role")])


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return SystemClock()


@lru_cache
def get_object_storage() -> ObjectStorage:
    if ApplicationConfig.STORAGE_BACKEND == "s3":
        return S3ObjectStorage(
            bucket=ApplicationConfig.S3_BUCKET,
            region=ApplicationConfig.S3_REGION,
            endpoint_url=ApplicationConfig.S3_ENDPOINT_URL,
            url_ttl_seconds=ApplicationConfig.PRESIGNED_URL_TTL_SECONDS,
        )
    return LocalObjectStorage(
        root=ApplicationConfig.STORAGE_LOCAL_ROOT,
        base_url=ApplicationConfig.STORAGE_BASE_URL,
    )


def actor_from_claims(payload: dict) -> Actor:
    """
    Build the caller identity from JWT claims.

    Raises:
        ValidationError: unknown role or malformed ids
    """
    return _actor_adapter.validate_python(
        {
            "role": payload.get("role"),
            "id": payload.get("user_id"),
            "provider_id": payload.get("provider_id"),
        }
    )


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Actor:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Returns:
        Customer, Provider or Admin identity

    Raises:
        HTTPException: 401 if token is invalid, expired, or carries an
        unusable identity
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        return actor_from_claims(payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token does not carry a valid identity",
        )
