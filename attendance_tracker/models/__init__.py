from attendance_tracker.models.company import Company, SubscriptionStatus
from attendance_tracker.models.user import User
from attendance_tracker.models.kiosk import Kiosk, generate_api_key
from attendance_tracker.models.employee import Employee
from attendance_tracker.models.attendance_log import AttendanceLog, AttendanceEvent
