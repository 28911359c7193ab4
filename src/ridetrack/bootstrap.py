from __future__ import annotations

# isort: off
import ridetrack.models  # noqa: F401
# isort: on

from ridetrack.core.config import settings
from ridetrack.core.db import engine
from ridetrack.core.models import Base


def bootstrap() -> None:
    # Outside dev, the schema is owned by the Alembic migrations.
    if settings.environment in {"dev", "test"} and str(settings.database_url).startswith("sqlite"):
        Base.metadata.create_all(engine)
