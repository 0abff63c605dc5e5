import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ContributionDay(BaseModel):
    """Single calendar day with its contribution count."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date | None = None
    count: int = Field(ge=0)


class ContributionWeek(BaseModel):
    """Week bucket of chronologically ordered days, oldest first.

    GitHub returns 7 days per week except for the first and last week of the
    calendar window, which may be partial.
    """

    model_config = ConfigDict(frozen=True)

    days: list[ContributionDay] = Field(default_factory=list)

    @property
    def counts(self) -> list[int]:
        return [day.count for day in self.days]
