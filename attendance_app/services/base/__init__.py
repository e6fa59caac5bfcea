from attendance_app.services.base.base_service import BaseService
from attendance_app.services.base.service_result import ErrorSeverity, ServiceError, ServiceResult

__all__ = ["BaseService", "ErrorSeverity", "ServiceError", "ServiceResult"]
