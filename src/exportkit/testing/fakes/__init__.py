"""Testing fakes – in-memory doubles for export ports."""
from exportkit.testing.fakes.rows import InMemoryRowSource, numbered_records
from exportkit.testing.fakes.workbook import FakeSheet, RecordingWorkbookEngine

__all__ = [
    "FakeSheet",
    "InMemoryRowSource",
    "RecordingWorkbookEngine",
    "numbered_records",
]
