"""
Pydantic schemas for the attendance analytics application.
"""

from attendance_app.schemas.common import *  # noqa: F401,F403
from attendance_app.schemas.attendance import *  # noqa: F401,F403
