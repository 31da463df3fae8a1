from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from app.core.clock import ensure_utc

# Timestamps read back from SQLite are naive; they are UTC.
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]
