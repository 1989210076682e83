"""Exception types raised by flatpdf."""


class FlatPDFError(Exception):
    """Base class for all flatpdf errors."""


class ConfigurationError(FlatPDFError, ValueError):
    """Invalid unit, page format or orientation given at construction."""


class AssemblyError(FlatPDFError, RuntimeError):
    """Internal sequencing violation while assembling the PDF.

    Raised instead of returning a partially written document.
    """
