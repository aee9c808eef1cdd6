from time import sleep

import pytest
from pydantic import ValidationError

import pg_porter
from pg_porter.domain.models import ExportResult
from pg_porter.utils import profiler


def test_public_api_exports():
    for name in pg_porter.__all__:
        assert hasattr(pg_porter, name), name


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.peak_rss_bytes is None or stats.peak_rss_bytes > 0


def test_profile_block_records_duration_on_failure():
    with pytest.raises(ValueError):
        with profiler.profile_block("boom") as stats:
            raise ValueError("boom")
    assert stats.end_ts >= stats.start_ts


def test_export_result_is_frozen():
    result = ExportResult(sql="SELECT 1", out="o.csv", rows=1, elapsed_seconds=0.1)
    with pytest.raises(ValidationError):
        result.rows = 2
    assert result.rows == 1
