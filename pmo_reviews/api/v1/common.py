"""
Request/response pieces shared by the v1 routers.
"""

from typing import Annotated

from pydantic import StringConstraints

from pmo_reviews.domain.base import CamelModel

NameField = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str
