class InvalidInputError(ValueError):
    """Raised when an engine is called with inputs it cannot compute on."""

    pass


class ExternalCollaboratorError(Exception):
    """Raised by a text-generation client when the remote call fails.

    Never propagated past the fallback wrappers in
    ``psychometrics_lab.collaborators``.
    """

    pass


class ItemNotFoundError(KeyError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")

    def __str__(self) -> str:
        return f"Item not found: {self.item_id}"


class DuplicateItemError(ValueError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item id already in pool: {item_id}")
