"""
pptx2json: Convert PowerPoint .pptx presentations into a renderer-ready JSON
document model.

Each slide becomes a list of positioned, fully styled elements (shapes, text,
images, media, tables, charts, diagrams, groups and math) with placeholder
inheritance, group transforms and table styles already resolved.
"""

from pptx2json.config import DEFAULT_OPTIONS, ConverterOptions
from pptx2json.converter import convert, read_file
from pptx2json.data_types import Presentation, Slide
from pptx2json.exceptions import (
    ConversionError,
    FileEncryptedError,
    MalformedTreeError,
    PartNotFoundError,
    UnsupportedNodeError,
    ZipBombError,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Main functions
    "convert",
    "read_file",
    # Configuration
    "ConverterOptions",
    "DEFAULT_OPTIONS",
    # Results
    "Presentation",
    "Slide",
    # Errors
    "ConversionError",
    "FileEncryptedError",
    "MalformedTreeError",
    "PartNotFoundError",
    "UnsupportedNodeError",
    "ZipBombError",
]
