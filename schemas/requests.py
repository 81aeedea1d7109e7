"""
Request schemas used by the web application.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from werkzeug.datastructures import FileStorage

from .coercions import BoolAsString, CheckboxAsString, IntAsString, NumAsString


class UserParams(BaseModel):
    """Route params (plus query) for the user lookup endpoint."""

    user_id: str = Field(min_length=1)
    age: Optional[IntAsString] = None


class SearchQuery(BaseModel):
    """Query string of the search endpoint."""

    q: str = Field(min_length=1)
    page: IntAsString = 1
    min_rating: Optional[NumAsString] = None
    exact: BoolAsString = False
    tags: List[str] = Field(default_factory=list)


class SignupForm(BaseModel):
    """Multipart signup form with an optional avatar upload."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    age: IntAsString
    consent: CheckboxAsString = False
    friends: Optional[List[str]] = None
    avatar: Optional[FileStorage] = None
