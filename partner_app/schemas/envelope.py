from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Uniform result of every order-service call."""
    success: bool
    data: Any = None
    error: str | None = None
    status_code: int = Field(0, serialization_alias="statusCode")

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    @property
    def is_network_error(self) -> bool:
        return not self.success and self.status_code == 0

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class ActionResult(BaseModel):
    success: bool
    error: str | None = None
    status_code: int | None = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: str, status_code: int | None = None) -> "ActionResult":
        return cls(success=False, error=error, status_code=status_code)
