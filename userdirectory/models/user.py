"""User and page models for API responses."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field


class User(BaseModel):
    """Directory user record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., gt=0)
    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
    email: str
    avatar_url: str = Field(..., alias="avatarUrl")

    @computed_field(alias="fullName")
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Page(BaseModel):
    """One page of users plus pagination metadata."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_number: int = Field(..., ge=1, alias="pageNumber")
    page_size: int = Field(..., ge=1, alias="pageSize")
    total_count: int = Field(..., ge=0, alias="totalCount")
    total_pages: int = Field(..., ge=1, alias="totalPages")
    items: List[User] = Field(default_factory=list)

    @computed_field(alias="hasNext")
    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    @computed_field(alias="hasPrevious")
    @property
    def has_previous(self) -> bool:
        return self.page_number > 1
