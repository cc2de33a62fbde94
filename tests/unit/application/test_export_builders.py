"""Unit tests for book builders, styling and the builder factory."""
from __future__ import annotations

import asyncio
import csv
import io

import pytest

from exportkit.application.export import (
    ApplyBoldHeadersAction,
    ApplyColumnFormatsAction,
    ApplyColumnWidthAction,
    ArgumentOutOfRangeError,
    BookBuilderConfig,
    BookBuilderFactory,
    CsvBookBuilder,
    CsvBookFactory,
    CsvDataColumn,
    DataType,
    ExcelBookBuilder,
    ExcelBookFactory,
    ExcelBookStyler,
    ExcelDataColumn,
    FileType,
    MaxColumnCountExceededError,
    MissingArgumentError,
    OffsetRowSource,
    UnsupportedFileTypeError,
)
from exportkit.kernel.cancellation import CancellationToken
from exportkit.testing.fakes import InMemoryRowSource, RecordingWorkbookEngine, numbered_records

COLUMNS = [CsvDataColumn("id", "ID"), CsvDataColumn("name", "Name")]


def _csv_rows(stream) -> list[list[str]]:
    return list(csv.reader(io.StringIO(stream.read().decode("utf-8"))))


def _csv_builder(source, max_fetch: int = 10) -> CsvBookBuilder:
    return CsvBookBuilder(CsvBookFactory(), BookBuilderConfig(source, max_fetch))


# ---------------------------------------------------------------------------
# BookBuilderConfig
# ---------------------------------------------------------------------------
class TestBookBuilderConfig:
    def test_defaults(self):
        config = BookBuilderConfig(InMemoryRowSource([]))
        assert config.max_rows_per_fetch == 10_000

    def test_fetch_required(self):
        with pytest.raises(MissingArgumentError):
            BookBuilderConfig(None)  # type: ignore[arg-type]

    def test_fetch_must_be_callable(self):
        with pytest.raises(ArgumentOutOfRangeError):
            BookBuilderConfig("not callable")  # type: ignore[arg-type]

    @pytest.mark.parametrize("size", [0, -5])
    def test_batch_size_positive(self, size):
        with pytest.raises(ArgumentOutOfRangeError):
            BookBuilderConfig(InMemoryRowSource([]), size)


# ---------------------------------------------------------------------------
# Fetch loop
# ---------------------------------------------------------------------------
class TestBookBuilderFetchLoop:
    def test_batches_are_bounded_by_fetch_size_and_budget(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(100))
            stream = await _csv_builder(source, max_fetch=4).build(10, COLUMNS, OffsetRowSource(source))
            assert source.calls == [(0, 4), (4, 4), (8, 2)]
            rows = _csv_rows(stream)
            assert len(rows) == 11
            assert rows[-1] == ["9", "row-9"]
        asyncio.run(_run())

    def test_offset_row_source_shifts_fetches(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(30))
            stream = await _csv_builder(source).build(5, COLUMNS, OffsetRowSource(source, 20))
            assert source.calls == [(20, 5)]
            assert _csv_rows(stream)[1] == ["20", "row-20"]
        asyncio.run(_run())

    def test_short_batch_ends_book_early(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(100), limit=7)
            stream = await _csv_builder(source, max_fetch=5).build(20, COLUMNS, OffsetRowSource(source))
            assert source.calls == [(0, 5), (5, 5)]
            assert len(_csv_rows(stream)) == 1 + 7
        asyncio.run(_run())

    def test_empty_source_yields_header_only(self):
        async def _run():
            source = InMemoryRowSource([])
            stream = await _csv_builder(source).build(10, COLUMNS, OffsetRowSource(source))
            assert source.call_count == 1
            assert _csv_rows(stream) == [["ID", "Name"]]
        asyncio.run(_run())

    def test_zero_budget_never_fetches(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(5))
            stream = await _csv_builder(source).build(0, COLUMNS, OffsetRowSource(source))
            assert source.call_count == 0
            assert _csv_rows(stream) == [["ID", "Name"]]
        asyncio.run(_run())

    def test_oversized_batch_is_truncated(self):
        async def _run():
            async def greedy(offset, count, cancel_token):
                return numbered_records(count + 5)

            stream = await _csv_builder(greedy).build(3, COLUMNS, OffsetRowSource(greedy))
            assert len(_csv_rows(stream)) == 4
        asyncio.run(_run())

    def test_none_batch_rejected(self):
        async def _run():
            async def broken(offset, count, cancel_token):
                return None

            with pytest.raises(MissingArgumentError) as exc_info:
                await _csv_builder(broken).build(3, COLUMNS, OffsetRowSource(broken))
            assert exc_info.value.parameter == "batch"
        asyncio.run(_run())


# ---------------------------------------------------------------------------
# Validation & cancellation
# ---------------------------------------------------------------------------
class TestBookBuilderValidation:
    def test_negative_budget(self):
        async def _run():
            source = InMemoryRowSource([])
            with pytest.raises(ArgumentOutOfRangeError):
                await _csv_builder(source).build(-1, COLUMNS, OffsetRowSource(source))
            assert source.call_count == 0
        asyncio.run(_run())

    def test_none_columns(self):
        async def _run():
            source = InMemoryRowSource([])
            with pytest.raises(MissingArgumentError):
                await _csv_builder(source).build(1, None, OffsetRowSource(source))
        asyncio.run(_run())

    def test_too_many_columns(self):
        async def _run():
            source = InMemoryRowSource([])
            cols = [CsvDataColumn(f"f{i}", f"F{i}") for i in range(16_385)]
            with pytest.raises(MaxColumnCountExceededError):
                await _csv_builder(source).build(1, cols, OffsetRowSource(source))
            assert source.call_count == 0
        asyncio.run(_run())

    def test_missing_factory(self):
        with pytest.raises(MissingArgumentError):
            CsvBookBuilder(None, BookBuilderConfig(InMemoryRowSource([])))  # type: ignore[arg-type]

    def test_csv_builder_keeps_factory_and_config(self):
        books = CsvBookFactory(";")
        config = BookBuilderConfig(InMemoryRowSource([]), 5)
        builder = CsvBookBuilder(books, config)
        assert builder.book_factory is books
        assert builder.config is config
        assert builder.file_type is FileType.CSV

    def test_cancelled_before_start(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(10))
            token = CancellationToken()
            token.cancel()
            with pytest.raises(asyncio.CancelledError):
                await _csv_builder(source).build(10, COLUMNS, OffsetRowSource(source), token)
            assert source.call_count == 0
        asyncio.run(_run())

    def test_cancelled_between_batches(self):
        async def _run():
            token = CancellationToken()
            calls = []

            async def fetch(offset, count, cancel_token):
                calls.append(offset)
                token.cancel("stop")
                return numbered_records(count)

            with pytest.raises(asyncio.CancelledError):
                await _csv_builder(fetch, max_fetch=2).build(10, COLUMNS, OffsetRowSource(fetch), token)
            assert calls == [0]
        asyncio.run(_run())


# ---------------------------------------------------------------------------
# ExcelBookBuilder & styling
# ---------------------------------------------------------------------------
EXCEL_COLUMNS = [
    ExcelDataColumn("id", "ID", DataType.NUMBER, number_format="0", width=8),
    ExcelDataColumn("name", "Name"),
]


def _excel_builder(source, engines: list, styler=None) -> ExcelBookBuilder:
    def engine_factory():
        engine = RecordingWorkbookEngine()
        engines.append(engine)
        return engine

    books = ExcelBookFactory(3, engine_factory=engine_factory)
    return ExcelBookBuilder(books, BookBuilderConfig(source, 2), styler)


class TestExcelBookBuilder:
    def test_rollover_is_transparent_to_builder(self):
        async def _run():
            engines: list[RecordingWorkbookEngine] = []
            source = InMemoryRowSource(numbered_records(8))
            await _excel_builder(source, engines).build(8, EXCEL_COLUMNS, OffsetRowSource(source))
            engine = engines[0]
            assert [sheet.name for sheet in engine.sheets] == ["Sheet 1", "Sheet 2", "Sheet 3"]
            assert engine.saved and engine.closed
        asyncio.run(_run())

    def test_no_styling_without_styler(self):
        async def _run():
            engines: list[RecordingWorkbookEngine] = []
            source = InMemoryRowSource(numbered_records(2))
            await _excel_builder(source, engines).build(2, EXCEL_COLUMNS, OffsetRowSource(source))
            sheet = engines[0].sheets[0]
            assert not sheet.bold
            assert not sheet.number_formats
        asyncio.run(_run())

    def test_default_styler_applies_to_every_sheet(self):
        async def _run():
            engines: list[RecordingWorkbookEngine] = []
            source = InMemoryRowSource(numbered_records(5))
            builder = _excel_builder(source, engines, ExcelBookStyler())
            await builder.build(5, EXCEL_COLUMNS, OffsetRowSource(source))
            engine = engines[0]
            first, second = engine.sheets
            assert first.bold == {(1, 1), (1, 2)}
            assert second.bold == {(1, 1), (1, 2)}
            assert {row for row, _ in first.number_formats} == {2, 3, 4}
            assert {row for row, _ in second.number_formats} == {2, 3}
            assert first.widths == {1: 8}
            assert [name for name, _ in engine.autosized] == ["Sheet 1", "Sheet 2"]
        asyncio.run(_run())

    def test_custom_actions(self):
        async def _run():
            engines: list[RecordingWorkbookEngine] = []
            source = InMemoryRowSource(numbered_records(1))
            styler = ExcelBookStyler([ApplyBoldHeadersAction()])
            await _excel_builder(source, engines, styler).build(1, EXCEL_COLUMNS, OffsetRowSource(source))
            sheet = engines[0].sheets[0]
            assert sheet.bold
            assert not sheet.number_formats
            assert not engines[0].autosized
        asyncio.run(_run())

    def test_default_action_order(self):
        actions = ExcelBookStyler().actions
        assert [type(a) for a in actions] == [
            ApplyColumnFormatsAction,
            ApplyColumnWidthAction,
            ApplyBoldHeadersAction,
        ]


# ---------------------------------------------------------------------------
# BookBuilderFactory
# ---------------------------------------------------------------------------
class TestBookBuilderFactory:
    def _factory(self, **kwargs) -> BookBuilderFactory:
        return BookBuilderFactory(BookBuilderConfig(InMemoryRowSource([])), **kwargs)

    def test_default_registry(self):
        assert self._factory().file_types == frozenset({FileType.CSV, FileType.XLSX})

    def test_creates_fresh_builder_per_call(self):
        factory = self._factory()
        first = factory.create_builder(FileType.CSV)
        second = factory.create_builder("csv")
        assert isinstance(first, CsvBookBuilder)
        assert first is not second

    def test_excel_builder_carries_styler(self):
        styler = ExcelBookStyler()
        builder = self._factory(styler=styler).create_builder(FileType.XLSX)
        assert isinstance(builder, ExcelBookBuilder)
        assert builder.styler is styler

    @pytest.mark.parametrize("file_type", [FileType.ZIP, "pdf"])
    def test_unsupported(self, file_type):
        with pytest.raises(UnsupportedFileTypeError):
            self._factory().create_builder(file_type)

    def test_supports(self):
        factory = self._factory()
        assert factory.supports("xlsx")
        assert not factory.supports("pdf")
        assert not factory.supports(FileType.ZIP)

    def test_custom_registry(self):
        config = BookBuilderConfig(InMemoryRowSource([]))
        factory = BookBuilderFactory(config, {FileType.CSV: lambda: CsvBookBuilder(CsvBookFactory("|"), config)})
        assert factory.file_types == frozenset({FileType.CSV})

    def test_register(self):
        factory = self._factory()
        config = factory.config
        factory.register(FileType.ZIP, lambda: CsvBookBuilder(CsvBookFactory(), config))
        assert factory.supports(FileType.ZIP)

    def test_row_source_offset(self):
        async def _run():
            source = InMemoryRowSource(numbered_records(10))
            factory = BookBuilderFactory(BookBuilderConfig(source))
            rows = await factory.create_row_source(4).fetch(1, 2)
            assert [row["id"] for row in rows] == [5, 6]
        asyncio.run(_run())

    def test_config_required(self):
        with pytest.raises(MissingArgumentError):
            BookBuilderFactory(None)  # type: ignore[arg-type]
