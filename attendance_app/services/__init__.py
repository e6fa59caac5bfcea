"""
Service layer: the attendance analytics engine and the alert workflow.
"""

from attendance_app.services.base import BaseService, ErrorSeverity, ServiceError, ServiceResult
from attendance_app.services.attendance import *  # noqa: F401,F403
