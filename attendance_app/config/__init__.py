"""
Configuration package for the attendance analytics system.

This package contains the configuration modules for the application:
environment settings, logging and database connections.
"""

from attendance_app.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
