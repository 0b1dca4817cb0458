"""
splitledger Exception Hierarchy

All exceptions inherit from SplitLedgerError for easy catching.
"""


class SplitLedgerError(Exception):
    """Base exception for all splitledger errors"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ValidationError(SplitLedgerError):
    """Raised when an argument fails validation"""
    pass


class InvalidAmountError(ValidationError):
    """Raised for negative or non-integer amounts and over-allocated shares"""
    pass


class UnknownIdentityError(SplitLedgerError):
    """Raised when a user or group name lookup fails"""
    pass


class NotAMemberError(UnknownIdentityError):
    """Raised when a user is used with a group it does not belong to"""
    pass


class DuplicateIdentityError(SplitLedgerError):
    """Raised when a group name is registered twice"""
    pass


class InvariantViolationError(SplitLedgerError):
    """Raised when balances stop summing to zero or settlement leaves a remainder"""
    pass


class AuditLogError(SplitLedgerError):
    """Raised when audit log chain verification fails"""
    pass


class LedgerIntegrityWarning(UserWarning):
    """Emitted instead of InvariantViolationError in lenient mode"""
    pass
