"""Exception definitions for adminforms"""


class AdminFormsException(Exception):
    """Base exception for all adminforms errors.

    All custom exceptions in adminforms inherit from this class.
    Use this as a catch-all when you don't need to handle specific
    exception types.
    """

    pass


class ConfigException(AdminFormsException):
    """Raised when configuration or a form declaration is invalid.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    - A section or field declaration cannot be built
    """

    pass


class DuplicateFieldError(ConfigException):
    """Raised when two fields in one section share a name.

    The field name is both the storage key and the control identity, so a
    duplicate would silently overwrite the other field's stored value.
    """

    def __init__(self, section: str, name: str):
        self.section = section
        self.name = name
        super().__init__(f"Duplicate field name '{name}' in section '{section}'")


class UnknownFieldTypeError(ConfigException):
    """Raised when a field declares a type with no renderer."""

    pass


class StoreException(AdminFormsException):
    """Raised when the option store cannot be read or written.

    Use this exception when:
    - The backing file cannot be read, parsed or replaced
    - A database query fails
    """

    pass
