"""Testing support – fakes for the export row source and workbook engine."""

from exportkit.testing.fakes import (
    FakeSheet,
    InMemoryRowSource,
    RecordingWorkbookEngine,
    numbered_records,
)

__all__ = [
    "FakeSheet",
    "InMemoryRowSource",
    "RecordingWorkbookEngine",
    "numbered_records",
]
