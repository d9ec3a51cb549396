"""
Pydantic schemas for request payloads.

Field names follow the stored document shape (camelCase) because the admin
dashboard and the public site read the documents as-is.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

HEX_COLOR = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"
PHONE_NUMBER = r"^\+?[1-9]\d{0,15}$"
HTTP_URL = r"^https?://.+"
FACEBOOK_URL = re.compile(r"^https?://(www\.)?facebook\.com/.+")
INSTAGRAM_URL = re.compile(r"^https?://(www\.)?instagram\.com/.+")
YOUTUBE_URL = re.compile(r"^(https?://)?(www\.)?(youtube\.com/watch\?v=|youtu\.be/)[\w-]+")


class TrimmedModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    def changes(self) -> dict:
        """Fields the client actually sent, ready for a ``$set``."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


# Hero images / hero video


class HeroBannerFields(TrimmedModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    textColor: str = Field(..., pattern=HEX_COLOR)


class HeroBannerUpdate(TrimmedModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    textColor: Optional[str] = Field(None, pattern=HEX_COLOR)
    isActive: Optional[bool] = None


# Partners


class PartnerFields(TrimmedModel):
    partnerName: str = Field(..., min_length=1, max_length=100)


class PartnerUpdate(TrimmedModel):
    partnerName: Optional[str] = Field(None, min_length=1, max_length=100)
    isActive: Optional[bool] = None


# Team


class TeamMemberFields(TrimmedModel):
    name: str = Field(..., min_length=1, max_length=100)
    designation: str = Field(..., min_length=1, max_length=100)
    speciality: str = Field(..., min_length=1, max_length=200)


class TeamMemberUpdate(TrimmedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    designation: Optional[str] = Field(None, min_length=1, max_length=100)
    speciality: Optional[str] = Field(None, min_length=1, max_length=200)
    isActive: Optional[bool] = None


class TeamPictureFields(TrimmedModel):
    teamName: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)


# Features


class FeatureCreate(TrimmedModel):
    featureName: str = Field(..., min_length=1, max_length=100)
    featureDescription: str = Field(..., min_length=1, max_length=100)


# FAQs


class FaqCreate(TrimmedModel):
    question: str = Field(..., min_length=1, max_length=500)
    answer: str = Field(..., min_length=1, max_length=2000)


class FaqUpdate(TrimmedModel):
    question: Optional[str] = Field(None, min_length=1, max_length=500)
    answer: Optional[str] = Field(None, min_length=1, max_length=2000)
    isActive: Optional[bool] = None


# Feedback


class FeedbackCreate(TrimmedModel):
    username: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    status: Literal["enable", "disable"] = "enable"


class FeedbackUpdate(TrimmedModel):
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    rating: Optional[int] = Field(None, ge=1, le=5)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    status: Optional[Literal["enable", "disable"]] = None
    isActive: Optional[bool] = None


# Services and blogs


class Para(TrimmedModel):
    heading: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class PointPara(TrimmedModel):
    heading: str = Field(..., min_length=1)
    sentences: list[str] = Field(default_factory=list)


class CardInfoUpdate(TrimmedModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)


class ArticleUpdate(TrimmedModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    paras: Optional[list[Para]] = None
    pointParas: Optional[list[PointPara]] = None
    youtubeLinks: Optional[list[str]] = None


class ServiceUpdate(TrimmedModel):
    cardInfo: Optional[CardInfoUpdate] = None
    serviceBlog: Optional[ArticleUpdate] = None
    isActive: Optional[bool] = None


class BlogUpdate(TrimmedModel):
    cardInfo: Optional[CardInfoUpdate] = None
    blogContent: Optional[ArticleUpdate] = None
    isActive: Optional[bool] = None


# Results


class ResultFields(TrimmedModel):
    title: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=100)


# Clinic info


class Location(TrimmedModel):
    url: str = Field(..., pattern=HTTP_URL)
    description: str = Field(..., min_length=1, max_length=500)


class SocialLinks(TrimmedModel):
    facebook: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("facebook")
    @classmethod
    def validate_facebook(cls, value: Optional[str]) -> Optional[str]:
        if value and not FACEBOOK_URL.match(value):
            raise ValueError("Facebook link must be a valid Facebook URL")
        return value or None

    @field_validator("instagram")
    @classmethod
    def validate_instagram(cls, value: Optional[str]) -> Optional[str]:
        if value and not INSTAGRAM_URL.match(value):
            raise ValueError("Instagram link must be a valid Instagram URL")
        return value or None


EmailAddress = Annotated[EmailStr, AfterValidator(str.lower)]


class ClinicInfoCreate(TrimmedModel):
    name: str = Field(..., min_length=1, max_length=200)
    noOfExperience: int = Field(..., ge=0)
    noOfPatients: int = Field(..., ge=0)
    phoneNumber: str = Field(..., pattern=PHONE_NUMBER)
    location1: Location
    location2: Location
    socialLinks: Optional[SocialLinks] = None
    email: EmailAddress
    timings: Optional[str] = None


class ClinicInfoUpdate(TrimmedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    noOfExperience: Optional[int] = Field(None, ge=0)
    noOfPatients: Optional[int] = Field(None, ge=0)
    phoneNumber: Optional[str] = Field(None, pattern=PHONE_NUMBER)
    location1: Optional[Location] = None
    location2: Optional[Location] = None
    socialLinks: Optional[SocialLinks] = None
    email: Optional[EmailAddress] = None
    timings: Optional[str] = None
    isActive: Optional[bool] = None


# Auth


class RegisterRequest(TrimmedModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailAddress
    password: str = Field(..., min_length=6)


class LoginRequest(TrimmedModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()
