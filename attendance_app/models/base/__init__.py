from attendance_app.models.base.base_model import Base, BaseModel, ModelType, TimestampModel

__all__ = ["Base", "BaseModel", "ModelType", "TimestampModel"]
