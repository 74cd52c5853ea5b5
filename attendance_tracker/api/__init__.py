"""
API routers
"""

from attendance_tracker.api import attendance, auth, employees, kiosks, subscription

__all__ = ["attendance", "auth", "employees", "kiosks", "subscription"]
