"""Exceptions raised while building specs."""


class SpecError(Exception):
    """Base exception for invalid spec configuration."""

    pass


class SpecConflictError(SpecError):
    """A singular attribute was set more than once."""

    pass


class SpecKindError(SpecError):
    """A function spec of the wrong kind was supplied."""

    pass


class AbstractModifierError(SpecError):
    """The abstract modifier was used where it is not allowed."""

    pass
