from typing import Optional

from pydantic import Field

from fairshare.models.base import RecordModel


class User(RecordModel):
    """
    Roster entry. The engine only ever looks at ``id``; name and colour are
    kept for display.
    """
    name: str = Field(..., min_length=1, max_length=100)
    avatar_color: Optional[str] = None
