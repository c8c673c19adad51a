#app/schemas/types.py
from datetime import datetime
from typing import Annotated
from pydantic import AfterValidator

from app.core.time_tracking import as_utc

# SQLite отдаёт наивные datetime; в ответах все моменты времени в UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
