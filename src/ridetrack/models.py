"""
Alembic model import hook.

Importing this module ensures all SQLAlchemy models are registered on Base.metadata.
"""

from __future__ import annotations

# Import User first - rides reference it
from ridetrack.modules.identity.models import User  # noqa: F401

from ridetrack.modules.rides.models import Ride  # noqa: F401
