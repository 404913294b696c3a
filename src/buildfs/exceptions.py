class DirectoryCreationError(OSError):
    """
    Exception raised when a parent directory cannot be created before writing a file.

    The underlying ``OSError`` that caused the failure is chained as ``__cause__``
    so callers can inspect the platform error code.

    Attributes:
        directory (str): Path of the directory that could not be created.

    Example:
        >>> error = DirectoryCreationError("/read-only/out")
        >>> str(error)
        'Could not create directory: /read-only/out'
        >>> isinstance(error, OSError)
        True
    """

    def __init__(self, directory: str) -> None:
        """
        Initialize the exception with the directory that could not be created.

        Args:
            directory (str): Path of the directory that could not be created.
        """
        self.directory = directory
        super().__init__(f"Could not create directory: {directory}")
