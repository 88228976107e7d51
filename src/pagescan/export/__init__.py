"""Export: PNG/SVG encoding and filename helpers."""

from pagescan.export.exporter import (
    SUPPORTED_FORMATS,
    ExportConfig,
    FilenameValidation,
    build_export_path,
    encode_png,
    encode_svg,
    export_buffer,
    generate_default_filename,
    get_file_extension,
    normalize_folder_path,
    validate_filename,
)

__all__ = [
    "SUPPORTED_FORMATS",
    "ExportConfig",
    "FilenameValidation",
    "generate_default_filename",
    "validate_filename",
    "get_file_extension",
    "normalize_folder_path",
    "build_export_path",
    "encode_png",
    "encode_svg",
    "export_buffer",
]
