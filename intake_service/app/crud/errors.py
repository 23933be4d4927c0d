class IntakeError(Exception):
    """Base class for failures of the WhatsApp intake pipeline."""


class NoOrganizationConfigured(IntakeError):
    """No organization is available to host a message from an unknown sender."""


class TicketWriteError(IntakeError):
    """The service request row could not be persisted."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause
