"""Pydantic schemas for `Profile` domain objects."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.]{3,30}$")
URL_PATTERN = re.compile(r"^https?://\S+$")


def validate_username(v: str) -> str:
	v = v.strip()
	if not USERNAME_PATTERN.match(v):
		raise ValueError("Username must be 3-30 letters, digits, '_' or '.'")
	return v


def validate_optional_url(v: str) -> str:
	"""Empty string means no image; anything else must be an http(s) URL."""
	v = v.strip()
	if v and not URL_PATTERN.match(v):
		raise ValueError("URL must start with http:// or https://")
	return v


def reject_null(v):
	if v is None:
		raise ValueError("Field cannot be null")
	return v


class ProfileBase(BaseModel):
	username: str
	full_name: str = Field("", max_length=255)
	bio: str = Field("", max_length=1000)
	avatar_url: str = ""

	@field_validator("username")
	@classmethod
	def check_username(cls, v: str) -> str:
		return validate_username(v)

	@field_validator("avatar_url")
	@classmethod
	def check_avatar_url(cls, v: str) -> str:
		return validate_optional_url(v)


class ProfileUpdate(BaseModel):
	username: Optional[str] = None
	full_name: Optional[str] = Field(None, max_length=255)
	bio: Optional[str] = Field(None, max_length=1000)
	avatar_url: Optional[str] = None

	# fields may be left out, but not cleared with null
	@field_validator("username", "full_name", "bio", "avatar_url", mode="before")
	@classmethod
	def check_not_null(cls, v):
		return reject_null(v)

	@field_validator("username")
	@classmethod
	def check_username(cls, v: str) -> str:
		return validate_username(v)

	@field_validator("avatar_url")
	@classmethod
	def check_avatar_url(cls, v: str) -> str:
		return validate_optional_url(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"full_name": "Ada Lovelace",
			"bio": "Poet of numbers",
			"avatar_url": "https://cdn.example.com/avatars/ada.png",
		}
	})


class ProfileResponse(BaseModel):
	id: str
	username: str
	full_name: str
	bio: str
	avatar_url: str
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True, json_schema_extra={
		"example": {
			"id": "5b0a4f1e-8f8e-4a43-9d57-0d8a1f0c2e11",
			"username": "ada",
			"full_name": "Ada Lovelace",
			"bio": "Poet of numbers",
			"avatar_url": "",
			"created_at": "2025-10-09T17:43:38Z",
			"updated_at": "2025-10-09T17:43:38Z",
		}
	})
