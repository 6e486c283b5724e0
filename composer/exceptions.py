# composer/exceptions.py
"""
Exceptions for programming errors only.

Malformed or disallowed markup is never an error: it is normalised, stripped
or degraded to generic blocks. These exceptions signal an inconsistent
registry or schema, which is a bug in whoever built it.
"""


class ComposerError(Exception):
    """Base class for composer errors."""


class SchemaConflictError(ComposerError):
    """Two schema contributions for the same tag have incompatible shapes."""


class BlockTypeRegistrationError(ComposerError):
    """A block type was registered twice or with an invalid name."""


class BlockTypeNotRegistered(ComposerError):
    """A block was requested by a name nobody registered."""
