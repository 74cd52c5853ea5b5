"""
Data access per entity.

Every query on tenant-owned rows takes the company id as its first argument;
kiosk lookup by API key is the one entry point that resolves a tenant.
"""

from attendance_tracker.repositories.companies import CompanyRepository
from attendance_tracker.repositories.users import UserRepository
from attendance_tracker.repositories.kiosks import KioskRepository
from attendance_tracker.repositories.employees import EmployeeRepository
from attendance_tracker.repositories.attendance import AttendanceRepository

__all__ = [
    "CompanyRepository",
    "UserRepository",
    "KioskRepository",
    "EmployeeRepository",
    "AttendanceRepository",
]
