"""Pydantic schemas for identity (`User`) objects and auth payloads."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .profile import ProfileResponse, validate_username


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRegister(BaseModel):
	email: str
	password: str = Field(..., min_length=6, max_length=128)
	username: str
	full_name: str = Field("", max_length=255)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		v = v.strip().lower()
		if not EMAIL_PATTERN.match(v):
			raise ValueError("Invalid email address")
		return v

	@field_validator("username")
	@classmethod
	def check_username(cls, v: str) -> str:
		return validate_username(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "ada@example.com",
			"password": "StrongPass!234",
			"username": "ada",
			"full_name": "Ada Lovelace",
		}
	})


class TokenResponse(BaseModel):
	access_token: str
	token_type: str = "bearer"
	profile: Optional[ProfileResponse] = None
