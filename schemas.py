from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Stored documents

class GalleryImage(BaseModel):
    imageUrl: str = Field(..., min_length=1, description="Image URL or data URI")
    order: int = 0
    createdAt: datetime = Field(default_factory=utcnow)

class Montage(BaseModel):
    clientName: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    thumb: str = Field(..., min_length=1)
    order: int = 0
    createdAt: datetime = Field(default_factory=utcnow)

class Review(BaseModel):
    name: str = Field(..., min_length=1)
    shootType: str = Field(..., min_length=1)
    stars: Union[int, float]
    reviewText: str = Field(..., min_length=1)
    createdAt: datetime = Field(default_factory=utcnow)

    @field_validator("stars")
    @classmethod
    def stars_in_range(cls, v):
        if not 1 <= v <= 5:
            raise ValueError("must be between 1 and 5")
        return v

class ReviewVideo(BaseModel):
    title: str = ""
    videoUrl: str = Field(..., min_length=1)
    thumb: str = ""
    order: int = 0
    createdAt: datetime = Field(default_factory=utcnow)

class GalleryVideo(BaseModel):
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    thumb: str = Field(..., min_length=1)
    order: int = 0
    createdAt: datetime = Field(default_factory=utcnow)

class ContactInfo(BaseModel):
    # Fields may be cleared to null through the update endpoint
    phone1: Optional[str] = ""
    phone2: Optional[str] = ""
    email: Optional[str] = ""
    address: Optional[str] = ""
    instagram: Optional[str] = ""
    whatsapp: Optional[str] = ""
    mapsUrl: Optional[str] = ""
    workingHours: Optional[str] = ""
    updatedAt: datetime = Field(default_factory=utcnow)


# Request bodies. A missing list empties the collection.

class ImageList(BaseModel):
    images: Optional[List[str]] = None

class MontageList(BaseModel):
    montages: Optional[List[Dict[str, Any]]] = None

class ReviewVideoList(BaseModel):
    videos: Optional[List[Dict[str, Any]]] = None

class FilmList(BaseModel):
    films: Optional[List[Dict[str, Any]]] = None

class ReviewSubmission(BaseModel):
    # Constraints are checked on the stored Review document
    name: Optional[str] = None
    shootType: Optional[str] = None
    stars: Optional[Any] = None
    reviewText: Optional[str] = None

class ContactInfoUpdate(BaseModel):
    phone1: Optional[str] = None
    phone2: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    instagram: Optional[str] = None
    whatsapp: Optional[str] = None
    mapsUrl: Optional[str] = None
    workingHours: Optional[str] = None
