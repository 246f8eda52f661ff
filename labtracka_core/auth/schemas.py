"""
Auth Request Schemas
====================
Request payloads accepted by the auth flows.
"""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidRequestError

T = TypeVar("T", bound=BaseModel)


class AuthRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SendOTPRequest(AuthRequest):
    device_id: str = ""
    receiver: str = ""


class ValidateOTPRequest(AuthRequest):
    device_id: str = ""
    receiver: str = ""
    otp: str = ""


class LoginRequest(AuthRequest):
    device_id: str = ""
    email: str = ""
    password: str = Field(default="", json_schema_extra={"writeOnly": True})
    # Proof of OTP validation, needed when logging in from a new device.
    email_validation_token: str = ""


class CreateAccountRequest(AuthRequest):
    device_id: str = ""
    email: str = ""
    name: str = ""
    password: str = Field(default="", json_schema_extra={"writeOnly": True})
    email_validation_token: str = ""


class ResetPasswordRequest(AuthRequest):
    device_id: str = ""
    email: str = ""
    new_password: str = Field(default="", json_schema_extra={"writeOnly": True})
    email_validation_token: str = ""


def parse_request(model: Type[T], data: Mapping[str, Any]) -> T:
    """
    Build a request model from decoded JSON.

    Raises:
        InvalidRequestError: If the body does not match the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidRequestError("invalid request body") from e
