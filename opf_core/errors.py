"""Exceptions raised by the package-document resolver.

Missing optional data is never an error: lookups return None or an empty
list. Only structural problems with the input and malformed queries raise.
"""


class PackageDocumentError(ValueError):
    """The parsed document has no OPF package root element."""


class QueryError(ValueError):
    """A field selection names an unknown field or passes bad arguments."""
