"""
Error types raised by the assembly engine.

Both hard errors point at a malformed problem definition (a generator list
or constraint that references something that cannot exist). They are never
caught inside the search: they abort it and reach the caller unchanged.
Running out of candidates is not an error, it only prunes a branch.
"""


class AssemblyError(Exception):
    """Base class for all errors raised by rna_assembly."""


class InvalidVariant(AssemblyError, LookupError):
    """An accessor asked a template for a field its base kind does not have."""

    def __init__(self, template_name: str, kind: str, field: str):
        self.template_name = template_name
        self.kind = kind
        self.field = field
        super().__init__(
            f"[ERR-RNAASSEMBLY-INVALID-VARIANT-001] Template {template_name!r} "
            f"(base {kind}) has no field {field!r}"
        )

    def __reduce__(self):
        return (type(self), (self.template_name, self.kind, self.field))


class UnknownIdentity(AssemblyError, LookupError):
    """A generator or constraint referenced an identity that is not placed yet."""

    def __init__(self, identity: int, placed=()):
        self.identity = identity
        self.placed = tuple(placed)
        super().__init__(
            f"[ERR-RNAASSEMBLY-UNKNOWN-ID-001] Identity {identity} is not in the "
            f"partial assignment (placed: {list(self.placed)})"
        )

    def __reduce__(self):
        return (type(self), (self.identity, self.placed))
