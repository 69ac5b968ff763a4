"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

PIVOT_STRATEGIES = ("auto", "direct", "formula")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator evaluator thresholds."""
        errors = []

        for name, value in params.items():
            if not _is_number(value):
                errors.append(ValidationError(
                    field=f"indicators.{name}",
                    message="Must be a number",
                    value=value
                ))

        if errors:
            return errors

        # Each pair is (lower, upper) and must be strictly ordered
        ordered_pairs = [
            ("rsi_oversold", "rsi_overbought"),
            ("stoch_lower", "stoch_upper"),
            ("cci_lower", "cci_upper"),
            ("williams_oversold", "williams_overbought"),
        ]
        for lower, upper in ordered_pairs:
            if lower in params and upper in params and params[lower] >= params[upper]:
                errors.append(ValidationError(
                    field=f"indicators.{lower}",
                    message=f"Must be lower than {upper}",
                    value=params[lower]
                ))

        if "adx_trend" in params and params["adx_trend"] < 0:
            errors.append(ValidationError(
                field="indicators.adx_trend",
                message="Must be a non-negative number",
                value=params["adx_trend"]
            ))

        return errors

    @staticmethod
    def validate_dominance_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate dominance scorer point values."""
        errors = []

        for name in ("extreme_points", "midline_points", "momentum_points",
                     "trend_points", "weak_trend_points", "macd_points"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=f"dominance.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        if "neutral_split" in params:
            value = params["neutral_split"]
            if not _is_number(value) or not (0 <= value <= 100):
                errors.append(ValidationError(
                    field="dominance.neutral_split",
                    message="Must be a number between 0 and 100",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_aggregator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate final vote parameters."""
        errors = []

        if "bonus_weight" in params:
            value = params["bonus_weight"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="aggregator.bonus_weight",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_pivot_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pivot engine parameters."""
        errors = []

        if "strategy" in params and params["strategy"] not in PIVOT_STRATEGIES:
            errors.append(ValidationError(
                field="pivots.strategy",
                message=f"Must be one of {', '.join(PIVOT_STRATEGIES)}",
                value=params["strategy"]
            ))

        if "camarilla_divisor" in params:
            value = params["camarilla_divisor"]
            if not _is_number(value) or value == 0:
                errors.append(ValidationError(
                    field="pivots.camarilla_divisor",
                    message="Must be a non-zero number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_timeframe_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate timeframe qualifier."""
        errors = []

        if "interval" in params:
            value = params["interval"]
            if not isinstance(value, str) or not value or "|" in value:
                errors.append(ValidationError(
                    field="timeframe.interval",
                    message="Must be a non-empty string without '|'",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "timeframe" in config:
            errors.extend(ConfigValidator.validate_timeframe_params(config["timeframe"]))

        if "indicators" in config:
            errors.extend(ConfigValidator.validate_indicator_params(config["indicators"]))

        if "dominance" in config:
            errors.extend(ConfigValidator.validate_dominance_params(config["dominance"]))

        if "aggregator" in config:
            errors.extend(ConfigValidator.validate_aggregator_params(config["aggregator"]))

        if "pivots" in config:
            errors.extend(ConfigValidator.validate_pivot_params(config["pivots"]))

        return errors
