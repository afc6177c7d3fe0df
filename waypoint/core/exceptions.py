"""Domain errors raised by the service layer.

User-correctable errors also subclass ValueError so callers that already
handle bad input with ``except ValueError`` keep working.
"""


class WaypointError(Exception):
    """Base class for all service layer errors."""


# Assets

class UnsupportedFormatError(WaypointError, ValueError):
    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"unsupported format: {fmt}")


class EncodingError(WaypointError):
    """Content could not be encoded as a QR code."""


class WriteFailureError(WaypointError):
    """A generated asset could not be written."""


class FontLoadFailureError(WaypointError):
    """A font required for PDF output could not be opened."""


class MissingInputError(WaypointError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"could not read input file: {path}")


# Visit statistics

class ArithmeticUnderflowError(WaypointError):
    """Visit counters would go negative."""


# Schedule

class ScheduleError(WaypointError, ValueError):
    """Base class for rejected schedule changes."""


class AlreadyActiveError(ScheduleError):
    def __init__(self):
        super().__init__("game is already active")


class AlreadyClosedError(ScheduleError):
    def __init__(self):
        super().__init__("game is already closed")


class EndBeforeStartError(ScheduleError):
    def __init__(self):
        super().__init__("end time cannot be before start time")


class StartAfterEndError(ScheduleError):
    def __init__(self):
        super().__init__("start time cannot be after end time")


class ScheduleUpdateError(WaypointError):
    """The instance repository failed to persist a schedule change."""


# Teams

class UniqueConflictError(WaypointError):
    """A batch insert violated a uniqueness constraint."""


class TeamCodeExhaustedError(WaypointError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"failed to generate unique team codes after {attempts} attempts")


class TeamNotFoundError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("team not found")


# Check-ins

class AlreadyCheckedInError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("player has already scanned in")


class CheckOutAtWrongLocationError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("team is not at the correct location to check out")


class UnnecessaryCheckOutError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("player does not need to scan out")


class LocationNotFoundError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("location not found")


# Notifications

class NoRecipientsError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("no teams to send notification to")


class EmptyContentError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("content cannot be empty")


class NotificationDismissError(WaypointError):
    """The notification repository failed to dismiss a notification."""


# Users

class PasswordsDoNotMatchError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("passwords do not match")


class IncorrectOldPasswordError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("current password is incorrect")


class EmptyPasswordError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("password cannot be empty")


class PasswordUpdateFailedError(WaypointError):
    def __init__(self):
        super().__init__("failed to update password")


class SSOPasswordChangeError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("cannot change password for SSO accounts")


class UserNotAuthenticatedError(WaypointError):
    def __init__(self):
        super().__init__("user not authenticated")


class PermissionDeniedError(WaypointError):
    def __init__(self):
        super().__init__("permission denied")


class InstanceNotFoundError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("instance not found")


class TemplateSwitchError(WaypointError, ValueError):
    def __init__(self):
        super().__init__("cannot switch to a template")
