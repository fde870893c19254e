"""Fatal extraction errors.

Every exception here means the crate does not form a valid module tree (or
the run cannot produce its document) and aborts the whole run. Constructs
that are valid Rust but not representable in the output are never raised;
they are recorded as ``SkipIssue`` entries instead.
"""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Base class for fatal extraction failures."""


class MissingRootModuleError(ExtractionError):
    """Raised when the crate has no ``src/lib.rs``."""


class UnresolvedModuleError(ExtractionError):
    """Raised when a ``pub mod`` declaration has no matching file."""


class ModuleReadError(ExtractionError):
    """Raised when a module file cannot be read or decoded."""


class ModuleParseError(ExtractionError):
    """Raised when a module file does not parse cleanly."""


class OutputSerializationError(ExtractionError):
    """Raised when the output document cannot be rendered as JSON."""


class UnsupportedSchemaError(ExtractionError):
    """Raised when reading a document with an unknown schema version."""
