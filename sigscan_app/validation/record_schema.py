"""Schema validation for serialized cycle records before persistence."""

from typing import Any

import structlog

logger = structlog.get_logger(__name__)

RECOMMENDATIONS = ("Buy", "Sell", "Neutral")

READING_KEYS = ("hullma9", "rsi", "ema", "macd", "stochastic", "adx", "cci", "williamsR", "bbPower")

PIVOT_GROUP_KEYS = ("classic", "fibonacci", "camarilla", "woodie", "demark")

# Shape of one history entry; mirrors SymbolAnalysis/AggregateSummary.to_dict
RECORD_SCHEMA = {
    "type": "object",
    "required": ["symbols", "summary"],
    "properties": {
        "symbols": {
            "type": "array",
            "items": {
                "type": "object",
                "required": [
                    "symbol", "time", "price", *READING_KEYS,
                    "buySellDominance", "pivotPoints", "finalSignal",
                ],
            },
        },
        "summary": {
            "type": "object",
            "required": ["time", "totalSymbols", "buyPercent", "sellPercent", "neutralPercent"],
        },
    },
}

# Confidence values are rounded to two decimals each
CONFIDENCE_TOLERANCE = 0.011


class RecordValidationError(ValueError):
    """Cycle record validation error."""
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_nullable_number(value: Any) -> bool:
    return value is None or _is_number(value)


class RecordValidator:
    """Validates serialized cycle records against the record schema."""

    def __init__(self):
        self.logger = logger
        self.schema = RECORD_SCHEMA

    def validate_record(self, record: dict[str, Any]) -> bool:
        """
        Validate a cycle record.

        Args:
            record: Serialized cycle record (``CycleRecord.to_dict()``)

        Returns:
            True if valid

        Raises:
            RecordValidationError: If validation fails
        """
        try:
            if not isinstance(record, dict):
                raise ValueError(f"record must be an object, got {type(record).__name__}")

            self._validate_required(record, self.schema["required"], "record")

            symbols = record["symbols"]
            if not isinstance(symbols, list):
                raise ValueError("symbols must be an array")

            for index, analysis in enumerate(symbols):
                self._validate_analysis(analysis, f"symbols[{index}]")

            self._validate_summary(record["summary"], len(symbols))
            return True

        except ValueError as e:
            error_msg = f"Record validation failed: {e}"
            self.logger.error(error_msg)
            raise RecordValidationError(error_msg) from e

    def _validate_required(self, obj: dict[str, Any], required: list[str], where: str) -> None:
        missing_fields = [field for field in required if field not in obj]
        if missing_fields:
            raise ValueError(f"{where}: missing required fields: {missing_fields}")

    def _validate_analysis(self, analysis: Any, where: str) -> None:
        if not isinstance(analysis, dict):
            raise ValueError(f"{where} must be an object")

        item_schema = self.schema["properties"]["symbols"]["items"]
        self._validate_required(analysis, item_schema["required"], where)

        if not isinstance(analysis["symbol"], str) or not analysis["symbol"]:
            raise ValueError(f"{where}.symbol must be a non-empty string")

        for key in READING_KEYS:
            reading = analysis[key]
            if not isinstance(reading, dict):
                raise ValueError(f"{where}.{key} must be an object")
            if reading.get("recommendation") not in RECOMMENDATIONS:
                raise ValueError(f"{where}.{key}.recommendation invalid: {reading.get('recommendation')}")
            if not _is_nullable_number(reading.get("value")):
                raise ValueError(f"{where}.{key}.value must be a number or null")

        dominance = analysis["buySellDominance"]
        if not isinstance(dominance, dict) or not all(_is_number(dominance.get(side)) for side in ("buy", "sell")):
            raise ValueError(f"{where}.buySellDominance must hold numeric buy and sell")

        pivots = analysis["pivotPoints"]
        if not isinstance(pivots, dict):
            raise ValueError(f"{where}.pivotPoints must be an object")
        for group in PIVOT_GROUP_KEYS:
            levels = pivots.get(group)
            if not isinstance(levels, dict) or not all(_is_nullable_number(v) for v in levels.values()):
                raise ValueError(f"{where}.pivotPoints.{group} must map labels to numbers or null")
        if pivots.get("recommendation") not in RECOMMENDATIONS:
            raise ValueError(f"{where}.pivotPoints.recommendation invalid: {pivots.get('recommendation')}")

        self._validate_final_signal(analysis["finalSignal"], f"{where}.finalSignal")

    def _validate_final_signal(self, final: Any, where: str) -> None:
        if not isinstance(final, dict):
            raise ValueError(f"{where} must be an object")
        if final.get("decision") not in RECOMMENDATIONS:
            raise ValueError(f"{where}.decision invalid: {final.get('decision')}")

        confidence = final.get("confidence")
        if not isinstance(confidence, dict) or set(confidence) != set(RECOMMENDATIONS):
            raise ValueError(f"{where}.confidence must hold Buy, Sell and Neutral")
        if not all(_is_number(v) and 0 <= v <= 100 for v in confidence.values()):
            raise ValueError(f"{where}.confidence values must be between 0 and 100")
        if abs(sum(confidence.values()) - 100) > CONFIDENCE_TOLERANCE:
            raise ValueError(f"{where}.confidence must sum to 100, got {sum(confidence.values())}")

    def _validate_summary(self, summary: Any, symbol_count: int) -> None:
        if not isinstance(summary, dict):
            raise ValueError("summary must be an object")

        self._validate_required(summary, self.schema["properties"]["summary"]["required"], "summary")

        if summary["totalSymbols"] != symbol_count:
            raise ValueError(
                f"summary.totalSymbols ({summary['totalSymbols']}) does not match symbols ({symbol_count})"
            )

        for key in ("buyPercent", "sellPercent", "neutralPercent"):
            if not _is_number(summary[key]):
                raise ValueError(f"summary.{key} must be a number")

    def get_schema(self) -> dict[str, Any]:
        """Get the record schema."""
        return self.schema.copy()


# Global validator instance
validator = RecordValidator()


def validate_record(record: dict[str, Any]) -> bool:
    """Convenience function to validate a cycle record."""
    return validator.validate_record(record)
