"""Application exception hierarchy.

Services raise these; routers translate them into HTTP responses.  Only
:class:`InputError` aborts a generation batch; everything raised while
processing a single row is recorded against that row and the batch moves on.
"""


class PageforgeError(Exception):
    """Base class for all pageforge errors."""


class InputError(PageforgeError):
    """Malformed input (tabular data, request payload) detected before any write."""


class ParseError(InputError):
    """Raw tabular input could not be decoded or parsed."""


class RowError(PageforgeError):
    """Failure confined to one row of a batch."""


class EmptySeedError(RowError):
    """The slug seed normalised to an empty string."""


class NotFoundError(PageforgeError):
    """A page or deployment with the requested identifier does not exist."""


class ConflictError(PageforgeError):
    """A unique key was already taken when the write reached the store."""


class DuplicateSlugError(ConflictError):
    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Slug '{slug}' already exists.")
