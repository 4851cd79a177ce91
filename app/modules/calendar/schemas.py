from pydantic import BaseModel
from typing import Dict, List


class DayMarker(BaseModel):
    template_id: str
    name: str
    color: str


class CalendarMarkers(BaseModel):
    """Indicator dots keyed by ISO date."""
    days: Dict[str, List[DayMarker]] = {}
