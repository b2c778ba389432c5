"""
Tests for the section timer.
"""

import pytest

from pydistfit.core.compute import Timer


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        for _ in range(3):
            with timer.section('estimation'):
                pass
        with timer.section('scoring'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'estimation', 'scoring'}
        assert result['total_seconds'] >= result['estimation'] >= 0.0

    def test_section_recorded_when_body_raises(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('estimation'):
                raise ValueError("boom")
        timer.stop()
        assert 'estimation' in timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError, match="before start"):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError, match="before stop"):
            timer.result()
