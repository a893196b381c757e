"""Job application projection used for reminder generation."""

from datetime import date

from pydantic import BaseModel


class JobApplication(BaseModel):
    """
    Read-only view of an application joined with its company name.

    Only the fields reminder templates look at are carried.
    """

    id: int
    title: str | None = None
    position: str | None = None
    company_name: str | None = None
    location: str | None = None
    status: str | None = None
    application_date: date | None = None
    deadline: date | None = None
