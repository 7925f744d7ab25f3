class DoesNotExist(Exception):  # noqa: N818
    """Exception raised when a resource does not exist."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f'{resource_type} with ID "{resource_id!s}" does not exist')


class ValidationError(Exception):
    """Exception raised when a submitted field fails validation."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """
        Serialize the error the way the HTTP layer reports it.

        Returns:
            Dictionary with ``message`` and, when known, ``field``

        """
        data = {"message": self.message}
        if self.field:
            data["field"] = self.field
        return data


class Unauthorized(Exception):  # noqa: N818
    """Exception raised when submitted credentials do not match."""

    def __init__(self, message: str = "Invalid credentials"):
        self.message = message
        super().__init__(message)


class ProtectedFolder(Exception):  # noqa: N818
    """Exception raised when deleting a folder that must always exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Folder "{name}" cannot be deleted')


class StoreCorrupted(Exception):  # noqa: N818
    """Exception raised when a persisted slot cannot be decoded."""

    def __init__(self, slot: str, error: Exception | str):
        self.slot = slot
        self.error = error
        super().__init__(f'Storage slot "{slot}" is corrupted: {error}')
