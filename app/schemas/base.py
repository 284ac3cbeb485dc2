"""
Base schema classes shared by every API payload.

ORM-backed responses (bookings, vehicles, companies, rate cards) keep their
column names; computed report and dashboard payloads use camelCase keys.
Money is exposed as a 2-decimal string and every success body is wrapped in
the `{success, data}` envelope.

RULE: schemas built from ORM rows MUST inherit from BaseResponseSchema.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from app.services.aggregation import format_money


# Money serialized as a fixed 2-decimal string in JSON
Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str, when_used="json")]

T = TypeVar("T")


class BaseResponseSchema(BaseModel):
    """
    Response read straight from an ORM row.

    UUIDs go out as strings, datetimes in ISO format. Fields with an explicit
    alias (e.g. VehicleResponse.assigned_parcels -> assignedParcels) can still
    be filled by field name.
    """
    model_config = ConfigDict(
        from_attributes=True,
        json_encoders={
            UUID: str,
            datetime: lambda v: v.isoformat() if v else None,
        },
        populate_by_name=True,
    )


class CamelSchema(BaseModel):
    """Computed (non-ORM) payloads exposed with camelCase keys, e.g. report rows."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BaseCreateSchema(BaseModel):
    """Request body for create/upsert. Unknown keys sent by older pages are dropped."""
    model_config = ConfigDict(extra='ignore')


class BaseUpdateSchema(BaseModel):
    """Partial update body; services apply only the fields that were sent."""
    model_config = ConfigDict(extra='ignore')


class APIResponse(BaseModel, Generic[T]):
    """Success envelope: {success: true, data: ...}."""
    success: bool = True
    data: T


class APIListResponse(BaseModel, Generic[T]):
    """Success envelope for collections: {success: true, data: [...], count: n}."""
    success: bool = True
    data: List[T]
    count: int


class ErrorResponse(BaseModel):
    """Failure envelope: {success: false, error, message}."""
    success: bool = False
    error: str
    message: Any = None


def success_response(data, count: Optional[int] = None) -> dict:
    payload = {"success": True, "data": data}
    if count is not None:
        payload["count"] = count
    return payload
