from datetime import datetime

import pytest

from walkforward.errors import ConfigError, StreamError
from walkforward.market import CsvTickSource, Tick


def _write_ticks(tmp_path, lines):
    path = tmp_path / "ticks.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_parse_line():
    tick = Tick.parse_line("01/05/2014 17:00:05,1.36205,1.36235")
    assert tick.time == datetime(2014, 1, 5, 17, 0, 5)
    assert tick.bid == 1.36205
    assert tick.ask == 1.36235
    assert tick.spread == pytest.approx(0.0003)
    assert tick.is_sunday()
    assert tick.iso_time() == "2014-01-05 17:00:05"


def test_csv_source_reads_in_order_and_reopens_at_cursor(tmp_path):
    path = _write_ticks(
        tmp_path,
        [
            "01/05/2014 17:00:05,1.36205,1.36235",
            "01/05/2014 17:00:09,1.36206,1.36236",
            "",
            "01/05/2014 17:00:14,1.36210,1.36240",
        ],
    )
    source = CsvTickSource(path)

    records = list(source.read_from())
    assert [record.tick.bid for record in records] == [1.36205, 1.36206, 1.36210]
    assert records[0].position == 0
    assert records[1].position == records[0].next_position

    resumed = list(source.read_from(records[1].position))
    assert [record.tick for record in resumed] == [records[1].tick, records[2].tick]


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError):
        CsvTickSource(tmp_path / "missing.csv")


def test_jpy_detection(tmp_path):
    regular = CsvTickSource(_write_ticks(tmp_path, ["01/05/2014 17:00:05,1.36205,1.36235"]))
    assert regular.is_jpy_quoted() is False

    jpy_path = tmp_path / "jpy.csv"
    jpy_path.write_text("01/05/2014 17:00:05,104.915,104.935\n", encoding="utf-8")
    assert CsvTickSource(jpy_path).is_jpy_quoted() is True

    odd_path = tmp_path / "odd.csv"
    odd_path.write_text("01/05/2014 17:00:05,1.3620,1.3623\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        CsvTickSource(odd_path).is_jpy_quoted()


def test_malformed_line_is_stream_error(tmp_path):
    path = _write_ticks(tmp_path, ["01/05/2014 17:00:05,1.36205,1.36235", "01/05/2014 17:00:09,oops,1.36236"])
    records = CsvTickSource(path).read_from()
    next(records)
    with pytest.raises(StreamError):
        next(records)


def test_invalid_utf8_is_stream_error(tmp_path):
    path = tmp_path / "ticks.csv"
    path.write_bytes(b"01/05/2014 17:00:05,1.30000,1.30020\n\xff\xfe bad\n")
    with pytest.raises(StreamError, match="byte 36"):
        list(CsvTickSource(path).read_from(0))


def test_invalid_utf8_in_jpy_detection_is_config_error(tmp_path):
    path = tmp_path / "ticks.csv"
    path.write_bytes(b"\xff\xfe bad\n")
    with pytest.raises(ConfigError):
        CsvTickSource(path).is_jpy_quoted()
