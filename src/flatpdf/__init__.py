from .version import __version__ as __version__
from .errors import (
    FlatPDFError as FlatPDFError,
    ConfigurationError as ConfigurationError,
    AssemblyError as AssemblyError,
)
from .geometry import (
    PageGeometry as PageGeometry,
    resolve_geometry as resolve_geometry,
    document_options as document_options,
    DEFAULTS as DEFAULTS,
    UNITS as UNITS,
    PAGE_FORMATS_PT as PAGE_FORMATS_PT,
)
from .utils.pdf_helpers import escape_pdf_text as escape_pdf_text
from .document import Document as Document
from .validation import (
    validate_pdf as validate_pdf,
    ValidationIssue as ValidationIssue,
    ValidationResult as ValidationResult,
)
