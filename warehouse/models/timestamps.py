from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class TimestampColumns:
    """Creation/update times shared by every entity.

    ``created_at`` is filled in by the store on insert. ``updated_at`` is
    only ever written when a caller sets it explicitly.
    """
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
