"""
Domain exceptions raised by services and translated to HTTP responses by the API layer
"""


class AttendanceTrackerError(Exception):
    """Base exception for business rule violations."""


class ConflictError(AttendanceTrackerError):
    """Raised when a write collides with a uniqueness constraint."""


class CompanyNotFound(AttendanceTrackerError):
    def __init__(self, company_id: int):
        self.company_id = company_id
        super().__init__(f"Company {company_id} not found.")


class RegistrationConflict(ConflictError):
    def __init__(self):
        super().__init__("Company or email already exists.")


class InvalidCredentials(AttendanceTrackerError):
    def __init__(self):
        super().__init__("Invalid email or password.")


class SeatLimitReached(AttendanceTrackerError):
    """The company already holds as many employees as its plan allows."""

    def __init__(self, max_employees: int):
        self.max_employees = max_employees
        super().__init__(f"Employee limit of {max_employees} reached.")


class SubscriptionInactive(AttendanceTrackerError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Subscription is not active (status: {status}).")


class CardAlreadyInUse(ConflictError):
    def __init__(self, nfc_card_id: str):
        self.nfc_card_id = nfc_card_id
        super().__init__("Failed to add employee. That Card ID is already in use.")


class EmployeeNotFound(AttendanceTrackerError):
    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__("Employee not found.")


class CardNotRecognized(AttendanceTrackerError):
    def __init__(self, nfc_card_id: str):
        self.nfc_card_id = nfc_card_id
        super().__init__("Card not recognized.")


class TapCooldownActive(AttendanceTrackerError):
    """A tap arrived inside the configured cooldown window."""

    def __init__(self, cooldown_minutes: int, retry_after_seconds: int):
        self.cooldown_minutes = cooldown_minutes
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            f"Tap ignored: please wait {cooldown_minutes} minutes between taps."
        )


class UnknownPrice(AttendanceTrackerError):
    def __init__(self, price_id: str):
        self.price_id = price_id
        super().__init__(f"Unknown price: {price_id}")


class BillingNotConfigured(AttendanceTrackerError):
    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Billing is not configured: {setting} is missing")


class WebhookSignatureError(AttendanceTrackerError):
    """The webhook payload could not be authenticated."""
