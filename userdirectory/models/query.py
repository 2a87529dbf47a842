"""Query configuration and persisted preference models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortKey(str, Enum):
    """Sortable user fields."""

    NONE = "none"
    FIRST_NAME = "firstName"
    EMAIL = "email"

    @property
    def field_name(self) -> str:
        """Attribute on User this key sorts by."""
        return {
            SortKey.FIRST_NAME: "first_name",
            SortKey.EMAIL: "email",
        }.get(self, "")


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class FilterKind(str, Enum):
    """Structured filter rules."""

    NONE = "none"
    DOMAIN = "domain"
    FIRST_LETTER = "firstLetter"


class SearchScope(str, Enum):
    """Whether queries run over the current page or the whole dataset."""

    PAGE = "page"
    GLOBAL = "global"


class DisplayMode(str, Enum):
    """Presentation mode for the directory."""

    TABLE = "table"
    CARD = "card"


class QueryConfig(BaseModel):
    """Search, filter and sort settings applied to a list of users."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search_text: str = Field("", alias="searchText")
    sort_key: SortKey = Field(SortKey.NONE, alias="sortKey")
    sort_direction: SortDirection = Field(SortDirection.ASC, alias="sortDirection")
    filter_kind: FilterKind = Field(FilterKind.NONE, alias="filterKind")
    filter_value: str = Field("", alias="filterValue")
    search_scope: SearchScope = Field(SearchScope.PAGE, alias="searchScope")
    # Used when sort_key is NONE
    sort_fallback: SortKey = Field(SortKey.FIRST_NAME, alias="sortFallback")

    @property
    def effective_sort_key(self) -> SortKey:
        if self.sort_key is not SortKey.NONE:
            return self.sort_key
        if self.sort_fallback is not SortKey.NONE:
            return self.sort_fallback
        return SortKey.FIRST_NAME


class DirectoryPreferences(BaseModel):
    """Everything the controller persists between sessions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_size: int = Field(6, gt=0, alias="pageSize")
    query: QueryConfig = Field(default_factory=QueryConfig)
    display_mode: DisplayMode = Field(DisplayMode.TABLE, alias="displayMode")
    compact: bool = False
