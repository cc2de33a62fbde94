"""Application export – book builders (fetch loop per book)."""
from exportkit.application.export.builder.base import BookBuilder
from exportkit.application.export.builder.config import BookBuilderConfig
from exportkit.application.export.builder.csv_builder import CsvBookBuilder
from exportkit.application.export.builder.excel_builder import ExcelBookBuilder
from exportkit.application.export.builder.factory import BookBuilderFactory, BuilderConstructor
from exportkit.application.export.builder.styling import (
    ApplyBoldHeadersAction,
    ApplyColumnFormatsAction,
    ApplyColumnWidthAction,
    ExcelBookStyleAction,
    ExcelBookStyler,
    default_style_actions,
)

__all__ = [
    "ApplyBoldHeadersAction",
    "ApplyColumnFormatsAction",
    "ApplyColumnWidthAction",
    "BookBuilder",
    "BookBuilderConfig",
    "BookBuilderFactory",
    "BuilderConstructor",
    "CsvBookBuilder",
    "ExcelBookBuilder",
    "ExcelBookStyleAction",
    "ExcelBookStyler",
    "default_style_actions",
]
