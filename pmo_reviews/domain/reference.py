"""
Reference data maintained by administrators: zones, departments, questions.
"""

from typing import Annotated, Optional

from pydantic import Field, StringConstraints

from pmo_reviews.domain.base import Entity

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Text = Annotated[str, StringConstraints(strip_whitespace=True)]


class Zone(Entity):
    """A geographic zone where reviews take place."""

    name: Name = Field(..., description="Unique zone name")
    description: Optional[Text] = Field(default=None)


class Department(Entity):
    """A department whose operations are reviewed."""

    name: Name = Field(..., description="Unique department name")
    description: Optional[Text] = Field(default=None)


class Question(Entity):
    """
    A question reviewers answer for a department.

    ``department_name`` is a snapshot taken when the question is written; it is
    not updated when the department is later renamed.
    """

    text: Name
    department_id: str
    department_name: Name = Field(..., description="Department name snapshot")
    order: int = Field(default=0)
    is_active: bool = Field(default=True)
