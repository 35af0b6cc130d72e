"""
Service Result Envelope

Every public service operation returns a ServiceResult. Success and failure
share the same shape, so routers only forward ``status_code`` and the body.
"""

from dataclasses import dataclass
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from migration_api.core.errors import ServiceError


@dataclass
class ServiceResult:
    """Uniform {message, success, status_code, data, details} envelope."""

    message: str
    success: bool
    status_code: int
    data: Any = None
    details: dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str, data: Any = None, status_code: int = 200) -> "ServiceResult":
        return cls(message=message, success=True, status_code=status_code, data=data)

    @classmethod
    def failure(
        cls,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> "ServiceResult":
        return cls(message=message, success=False, status_code=status_code, details=details)

    @classmethod
    def from_error(cls, error: ServiceError) -> "ServiceResult":
        """Translate a ServiceError into a failure envelope."""
        return cls.failure(error.message, error.status_code, error.details)

    def to_response(self, schema: type[BaseModel] | None = None) -> JSONResponse:
        """
        Render the envelope as a JSONResponse.

        Args:
            schema: Optional response model used to serialize ``data``
                (ORM objects are read with from_attributes).
        """
        data = self.data
        if schema is not None and data is not None:
            if isinstance(data, list):
                data = [schema.model_validate(item, from_attributes=True) for item in data]
            else:
                data = schema.model_validate(data, from_attributes=True)

        body: dict[str, Any] = {
            "message": self.message,
            "success": self.success,
            "status_code": self.status_code,
        }
        if data is not None:
            body["data"] = data
        if self.details is not None:
            body["details"] = self.details

        return JSONResponse(status_code=self.status_code, content=jsonable_encoder(body))
