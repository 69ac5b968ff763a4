"""Tests for per-indicator evaluators"""

import pytest

from sigscan_app.config.defaults import IndicatorParams
from sigscan_app.data.fields import FieldReader
from sigscan_app.indicators.evaluators import (
    EVALUATORS,
    evaluate_adx,
    evaluate_bb_power,
    evaluate_cci,
    evaluate_ema,
    evaluate_hullma9,
    evaluate_indicators,
    evaluate_macd,
    evaluate_rsi,
    evaluate_stochastic,
    evaluate_williams_r,
)
from sigscan_app.models.signals import Reading, Recommendation

BUY = Recommendation.BUY
SELL = Recommendation.SELL
NEUTRAL = Recommendation.NEUTRAL


class TestMissingInputs:
    """Every evaluator degrades to Neutral with a null value"""

    @pytest.mark.parametrize("name", sorted(EVALUATORS))
    def test_empty_snapshot_is_neutral(self, name):
        reading = EVALUATORS[name]({})
        assert reading.recommendation == NEUTRAL
        assert reading.value is None

    @pytest.mark.parametrize("name", sorted(EVALUATORS))
    def test_null_fields_are_neutral(self, name):
        snapshot = {key: None for key in (
            "close|15", "HullMA9|15", "RSI|15", "Rec.RSI|15", "EMA20|15",
            "MACD.macd|15", "MACD.signal|15", "Stoch.K|15", "Stoch.D|15",
            "ADX|15", "ADX+DI|15", "ADX-DI|15", "CCI20|15", "W.R|15", "BBPower|15",
        )}
        reading = EVALUATORS[name](snapshot)
        assert reading.recommendation == NEUTRAL
        assert reading.value is None

    @pytest.mark.parametrize("name", sorted(EVALUATORS))
    def test_string_values_are_ignored(self, name):
        snapshot = {"close|15": "n/a", "RSI|15": "75", "BBPower|15": "1", "CCI20|15": "200"}
        reading = EVALUATORS[name](snapshot)
        assert reading.recommendation == NEUTRAL
        assert reading.value is None

    @pytest.mark.parametrize("name", sorted(EVALUATORS))
    def test_close_alone_gives_null_price(self, name):
        reading = EVALUATORS[name]({"close|15": 101.5})
        assert reading == Reading.neutral()
        assert reading.price is None

    def test_other_timeframe_is_not_read(self):
        reading = evaluate_hullma9({"close|60": 110, "HullMA9|60": 100})
        assert reading == Reading.neutral()

    def test_custom_interval(self):
        reading = evaluate_hullma9({"close|60": 110, "HullMA9|60": 100}, interval="60")
        assert reading.recommendation == BUY


class TestHullMA9:
    """Close against the Hull moving average"""

    @pytest.mark.parametrize("close,expected", [(110, BUY), (90, SELL), (100, NEUTRAL)])
    def test_close_vs_hull(self, close, expected):
        reading = evaluate_hullma9({"close|15": close, "HullMA9|15": 100})
        assert reading.recommendation == expected
        assert reading.value == 100.0
        assert reading.price == 100.0

    def test_missing_close(self):
        reading = evaluate_hullma9({"HullMA9|15": 100})
        assert reading == Reading(value=None, recommendation=NEUTRAL, price=None)


class TestRSI:
    """RSI with upstream recommendation override"""

    @pytest.mark.parametrize("rsi,expected", [
        (75, SELL), (70.01, SELL), (70, NEUTRAL), (50, NEUTRAL), (30, NEUTRAL), (29.9, BUY), (10, BUY)
    ])
    def test_raw_thresholds(self, rsi, expected):
        reading = evaluate_rsi({"RSI|15": rsi, "close|15": 101.5})
        assert reading.recommendation == expected
        assert reading.value == rsi
        assert reading.price == 101.5

    @pytest.mark.parametrize("upstream,expected", [(1, BUY), (0.5, BUY), (-1, SELL), (0, NEUTRAL)])
    def test_upstream_sign_overrides_value(self, upstream, expected):
        # RSI 80 alone would be Sell
        reading = evaluate_rsi({"RSI|15": 80, "Rec.RSI|15": upstream})
        assert reading.recommendation == expected
        assert reading.value == 80

    def test_non_numeric_upstream_falls_back(self):
        reading = evaluate_rsi({"RSI|15": 20, "Rec.RSI|15": "BUY"})
        assert reading.recommendation == BUY

    def test_upstream_without_rsi_value(self):
        reading = evaluate_rsi({"Rec.RSI|15": -1})
        assert reading.recommendation == SELL
        assert reading.value is None

    def test_price_absent_without_close(self):
        assert evaluate_rsi({"RSI|15": 20}).price is None

    def test_custom_thresholds(self):
        params = IndicatorParams(rsi_overbought=80, rsi_oversold=20)
        assert evaluate_rsi({"RSI|15": 75}, params).recommendation == NEUTRAL


class TestEMA:
    """Close against EMA20"""

    @pytest.mark.parametrize("close,expected", [(105, BUY), (95, SELL), (100, NEUTRAL)])
    def test_close_vs_ema(self, close, expected):
        reading = evaluate_ema({"close|15": close, "EMA20|15": 100})
        assert reading.recommendation == expected
        assert reading.value == 100
        assert reading.price == close

    def test_missing_close_nulls_price(self):
        reading = evaluate_ema({"EMA20|15": 100})
        assert reading == Reading.neutral()


class TestMACD:
    """MACD line against signal line"""

    @pytest.mark.parametrize("line,signal,expected", [(1, 0.5, BUY), (0.5, 1, SELL), (0.3, 0.3, NEUTRAL)])
    def test_line_vs_signal(self, line, signal, expected):
        reading = evaluate_macd({"MACD.macd|15": line, "MACD.signal|15": signal})
        assert reading.recommendation == expected
        assert reading.value == line

    def test_missing_signal(self):
        reading = evaluate_macd({"MACD.macd|15": 1})
        assert reading.recommendation == NEUTRAL
        assert reading.value is None


class TestStochastic:
    """%K/%D crossover outside the extreme bands"""

    @pytest.mark.parametrize("k,d,expected", [
        (60, 50, BUY),
        (85, 50, NEUTRAL),   # bullish cross inside overbought band
        (80, 50, NEUTRAL),
        (40, 50, SELL),
        (15, 50, NEUTRAL),   # bearish cross inside oversold band
        (20, 50, NEUTRAL),
        (50, 50, NEUTRAL),
    ])
    def test_crossover(self, k, d, expected):
        reading = evaluate_stochastic({"Stoch.K|15": k, "Stoch.D|15": d})
        assert reading.recommendation == expected
        assert reading.value == k


class TestADX:
    """Trend strength gating DI comparison"""

    @pytest.mark.parametrize("adx,plus_di,minus_di,expected", [
        (25, 30, 10, BUY),
        (25, 10, 30, SELL),
        (25, 20, 20, NEUTRAL),
        (20, 30, 10, NEUTRAL),
        (15, 10, 30, NEUTRAL),
    ])
    def test_trend_and_direction(self, adx, plus_di, minus_di, expected):
        reading = evaluate_adx({"ADX|15": adx, "ADX+DI|15": plus_di, "ADX-DI|15": minus_di})
        assert reading.recommendation == expected
        assert reading.value == adx

    def test_requires_all_three(self):
        reading = evaluate_adx({"ADX|15": 40, "ADX+DI|15": 30})
        assert reading.recommendation == NEUTRAL
        assert reading.value is None


class TestCCI:
    """CCI beyond +/-100"""

    @pytest.mark.parametrize("cci,expected", [(150, BUY), (100, NEUTRAL), (0, NEUTRAL), (-100, NEUTRAL), (-101, SELL)])
    def test_thresholds(self, cci, expected):
        assert evaluate_cci({"CCI20|15": cci}).recommendation == expected


class TestWilliamsR:
    """Williams %R overbought/oversold"""

    @pytest.mark.parametrize("wr,expected", [(-90, BUY), (-80, NEUTRAL), (-50, NEUTRAL), (-20, NEUTRAL), (-5, SELL)])
    def test_thresholds(self, wr, expected):
        assert evaluate_williams_r({"W.R|15": wr}).recommendation == expected


class TestBBPower:
    """Sign of bull/bear power"""

    @pytest.mark.parametrize("power,expected", [(2.5, BUY), (-0.1, SELL), (0, NEUTRAL)])
    def test_sign(self, power, expected):
        reading = evaluate_bb_power({"BBPower|15": power})
        assert reading.recommendation == expected
        assert reading.value == power


class TestEvaluateIndicators:
    """Running every evaluator at once"""

    def test_all_readings_present(self, bullish_snapshot):
        readings = evaluate_indicators(bullish_snapshot)
        assert set(readings) == set(EVALUATORS)
        assert all(r.recommendation == BUY for r in readings.values())

    def test_accepts_field_reader(self, bearish_snapshot):
        readings = evaluate_indicators(FieldReader(bearish_snapshot))
        assert all(r.recommendation == SELL for r in readings.values())

    def test_snapshot_not_mutated(self, bullish_snapshot):
        before = dict(bullish_snapshot)
        evaluate_indicators(bullish_snapshot)
        assert bullish_snapshot == before
