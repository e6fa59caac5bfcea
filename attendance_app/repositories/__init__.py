"""
Repositories and stores behind the analytics engine's collaborator interfaces.
"""

from attendance_app.repositories.base import BaseRepository
from attendance_app.repositories.attendance import *  # noqa: F401,F403
