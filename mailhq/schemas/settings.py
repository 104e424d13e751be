from pydantic import BaseModel
from typing import Any


class SettingValue(BaseModel):
    """Body of PUT /api/settings/{key}. The value is stored as-is."""
    value: Any = None
