"""Option validation exception classes."""

from typing import Any, Optional
from .base_exceptions import ZMapScannerError


class OptionValidationError(ZMapScannerError):
    """Exception raised when a scan option value is rejected.

    Raised at the point the option is applied, never deferred to run time.
    The argument list is left untouched when this is raised.
    """

    def __init__(self, message: str, flag: Optional[str] = None,
                 value: Any = None, **kwargs):
        """Initialize option validation error.

        Args:
            message: Error message
            flag: Command line flag the option controls
            value: Rejected value
            **kwargs: Additional arguments for base class
        """
        details = dict(kwargs.get('details') or {})
        if flag:
            details['flag'] = flag
        if value is not None:
            details['value'] = str(value)

        kwargs['details'] = details
        kwargs['error_code'] = kwargs.get('error_code', 'OPTION_VALIDATION_ERROR')

        super().__init__(message, **kwargs)

        self.flag = flag
        self.value = value


class DuplicateOptionError(OptionValidationError):
    """Exception raised when a flag is already present in the argument list."""

    def __init__(self, flag: str, **kwargs):
        message = (f"found already added {flag} argument. "
                   f"zmap does not allow multiple {flag} values")

        kwargs['error_code'] = 'DUPLICATE_OPTION'
        kwargs['suggestion'] = f'Apply {flag} only once per scanner'

        super().__init__(message, flag=flag, **kwargs)


class ConflictingOptionError(OptionValidationError):
    """Exception raised when two mutually exclusive flags are combined."""

    def __init__(self, flag: str, conflicting_flag: str, **kwargs):
        message = f"{flag} and {conflicting_flag} cannot be specified simultaneously"

        details = dict(kwargs.get('details') or {})
        details['conflicting_flag'] = conflicting_flag

        kwargs['details'] = details
        kwargs['error_code'] = 'CONFLICTING_OPTION'
        kwargs['suggestion'] = f'Use either {flag} or {conflicting_flag}'

        super().__init__(message, flag=flag, **kwargs)

        self.conflicting_flag = conflicting_flag
