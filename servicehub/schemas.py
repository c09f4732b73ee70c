"""
JSON schemas for the admin API.

Response models are built straight from ORM objects
(``from_attributes``) and dumped with camelCase aliases, which is what
the dashboard client consumes.  Request models validate incoming JSON
bodies; failures are converted to ``servicehub.errors.ValidationError``.

The ``*_variant`` fields tell the client which badge style to use for a
status or role.  They are plain lookup tables.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, computed_field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from servicehub.errors import ValidationError
from servicehub.models.service import ApprovalStatus
from servicehub.models.user import UserRole

# -- Badge variant lookup tables -------------------------------------------

STATUS_VARIANTS: dict[str, str] = {
    ApprovalStatus.APPROVED.value: "success",
    ApprovalStatus.PENDING.value: "default",
    ApprovalStatus.REJECTED.value: "destructive",
}

ROLE_VARIANTS: dict[str, str] = {
    UserRole.ADMIN.value: "destructive",
}

DEFAULT_VARIANT = "secondary"


def status_variant(status) -> str:
    """Badge variant for an approval status (enum or name)."""
    key = status.value if isinstance(status, ApprovalStatus) else str(status)
    return STATUS_VARIANTS.get(key, DEFAULT_VARIANT)


def role_variant(role) -> str:
    """Badge variant for a user role (enum or name)."""
    key = role.value if isinstance(role, UserRole) else str(role)
    return ROLE_VARIANTS.get(key, DEFAULT_VARIANT)


# -- Response models -------------------------------------------------------


class _Out(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ServiceOut(_Out):
    """Row in the admin service table."""

    id: int
    name: str
    provider_name: str
    approval_status: ApprovalStatus
    featured: bool

    @computed_field(alias="statusVariant")
    @property
    def status_variant(self) -> str:
        return status_variant(self.approval_status)


class ServiceDetailOut(ServiceOut):
    """Single service as shown on the admin detail view."""

    description: Optional[str] = None
    provider_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserOut(_Out):
    """Row in the admin user table."""

    id: int
    name: str
    email: str
    role: UserRole

    @computed_field(alias="roleVariant")
    @property
    def role_variant(self) -> str:
        return role_variant(self.role)


class AuditLogOut(_Out):
    """One audit trail entry."""

    id: int
    user_id: Optional[int] = None
    action_type: str
    entity_type: str
    entity_id: Optional[int] = None
    previous_value: Optional[dict[str, Any]] = None
    new_value: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @field_validator("previous_value", "new_value", mode="before")
    @classmethod
    def _decode_json(cls, value):
        if isinstance(value, str):
            return json.loads(value)
        return value


# -- Request models --------------------------------------------------------


class FeatureToggleIn(BaseModel):
    """Body of ``PATCH /admin/services/<id>/feature``."""

    featured: StrictBool


class DevTokenIn(BaseModel):
    """Body of ``POST /auth/dev-token``."""

    email: str


def load_body(model: type[BaseModel], payload) -> BaseModel:
    """
    Validate a decoded JSON body against ``model``.

    Raises:
        ValidationError: If the body is not an object or does not match.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(f"Invalid request body: {details}") from exc


def dump_many(model: type[_Out], rows) -> list[dict[str, Any]]:
    """Serialize a sequence of ORM rows with ``model``."""
    return [model.model_validate(row).dump() for row in rows]
