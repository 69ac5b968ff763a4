"""Tests for cycle record validation."""

import pytest

from sigscan_app.engine import SignalAnalysisEngine
from sigscan_app.validation.record_schema import (
    RecordValidationError,
    RecordValidator,
    validate_record,
)


@pytest.fixture
def record(bullish_snapshot, evaluation_time):
    return SignalAnalysisEngine().analyze_batch(
        {"CRYPTO:BTCUSD": bullish_snapshot, "CRYPTO:SOLUSD": {}},
        evaluation_time,
    ).to_dict()


class TestRecordValidator:
    """Schema checks on serialized records"""

    def test_engine_output_is_valid(self, record):
        assert validate_record(record) is True

    def test_empty_cycle_is_valid(self, evaluation_time):
        record = SignalAnalysisEngine().analyze_batch({}, evaluation_time).to_dict()
        assert validate_record(record) is True

    def test_not_an_object(self):
        with pytest.raises(RecordValidationError):
            validate_record(["symbols"])

    def test_missing_summary(self, record):
        del record["summary"]
        with pytest.raises(RecordValidationError, match="summary"):
            validate_record(record)

    def test_missing_reading(self, record):
        del record["symbols"][0]["williamsR"]
        with pytest.raises(RecordValidationError, match="williamsR"):
            validate_record(record)

    def test_bad_recommendation(self, record):
        record["symbols"][0]["rsi"]["recommendation"] = "Strong Buy"
        with pytest.raises(RecordValidationError, match="rsi.recommendation"):
            validate_record(record)

    def test_confidence_must_sum_to_100(self, record):
        record["symbols"][0]["finalSignal"]["confidence"] = {"Buy": 50.0, "Sell": 20.0, "Neutral": 20.0}
        with pytest.raises(RecordValidationError, match="sum to 100"):
            validate_record(record)

    def test_missing_final_signal(self, record):
        record["symbols"][1]["finalSignal"] = None
        with pytest.raises(RecordValidationError, match="finalSignal"):
            validate_record(record)

    def test_summary_count_mismatch(self, record):
        record["summary"]["totalSymbols"] = 5
        with pytest.raises(RecordValidationError, match="totalSymbols"):
            validate_record(record)

    def test_pivot_levels_must_be_numeric(self, record):
        record["symbols"][0]["pivotPoints"]["classic"]["r1"] = "105"
        with pytest.raises(RecordValidationError, match="classic"):
            validate_record(record)

    def test_get_schema(self):
        schema = RecordValidator().get_schema()
        assert schema["required"] == ["symbols", "summary"]
