"""
exportkit – chunked, size-aware document exports.

Import path convention::

    from exportkit.application.export import BookCompiler, ExportService
    from exportkit.application.export import CsvDataColumn, ExcelDataColumn, FileType
    from exportkit.kernel.cancellation import CancellationToken
    from exportkit.application.export import ExportSettings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
