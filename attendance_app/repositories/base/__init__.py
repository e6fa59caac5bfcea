from attendance_app.repositories.base.base_repository import BaseRepository

__all__ = ["BaseRepository"]
