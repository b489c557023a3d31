"""Content item and comment Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ItemCreate(BaseModel):
    """Schema for creating a new content item."""

    title: str = Field(..., min_length=1, max_length=255, description="Item title")
    body: str = Field("", max_length=20000, description="Item body")
    published: bool = Field(True, description="Whether the item is publicly visible")


class ItemUpdate(BaseModel):
    """Partial update of a content item; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    body: str | None = Field(None, max_length=20000)
    published: bool | None = None
    owner_id: int | None = Field(None, description="Transfer ownership to this user")


class ItemResponse(BaseModel):
    """Schema for content item information returned by the API."""

    id: int
    owner_id: int
    title: str
    body: str
    published: bool
    created: int
    changed: int

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Schema for adding a comment to an item."""

    body: str = Field(..., min_length=1, max_length=5000)
    published: bool = True


class CommentUpdate(BaseModel):
    """Partial update of a comment."""

    body: str | None = Field(None, min_length=1, max_length=5000)
    published: bool | None = None


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    item_id: int
    owner_id: int
    body: str
    published: bool
    created: int
    changed: int

    model_config = ConfigDict(from_attributes=True)
