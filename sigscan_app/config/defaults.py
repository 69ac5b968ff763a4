"""Default configuration parameters for the signal scanner."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimeframeParams:
    """Timeframe qualifier appended to every raw field key."""
    interval: str = "15"                             # "RSI" -> "RSI|15"


@dataclass(frozen=True)
class IndicatorParams:
    """Per-indicator evaluator thresholds (all comparisons strict)."""
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    stoch_upper: float = 80.0                        # %K must stay below for Buy
    stoch_lower: float = 20.0                        # %K must stay above for Sell
    adx_trend: float = 20.0                          # ADX <= this is a weak trend
    cci_upper: float = 100.0
    cci_lower: float = -100.0
    williams_oversold: float = -80.0
    williams_overbought: float = -20.0


@dataclass(frozen=True)
class DominanceParams:
    """Dominance scorer point values."""
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    rsi_midline: float = 50.0
    extreme_points: int = 25                         # RSI beyond 70/30
    midline_points: int = 15                         # RSI either side of 50
    momentum_points: int = 25
    adx_trend: float = 20.0
    trend_points: int = 25
    weak_trend_points: int = 10                      # added to both sides
    macd_points: int = 25
    neutral_split: float = 50.0                      # output when nothing scored


@dataclass(frozen=True)
class AggregatorParams:
    """Final signal vote parameters."""
    bonus_weight: int = 2
    bonus_indicators: tuple[str, ...] = ("rsi", "hullma9")


@dataclass(frozen=True)
class PivotParams:
    """Pivot point engine parameters."""
    strategy: str = "auto"                           # auto, direct, formula
    fibonacci_ratio: float = 0.382
    camarilla_factor: float = 1.1
    camarilla_divisor: float = 12.0


@dataclass(frozen=True)
class ScannerParams:
    """Snapshot acquisition parameters."""
    base_url: str = "https://scanner.tradingview.com/symbol"
    timeout_seconds: int = 10
    retry_attempts: int = 2
    retry_delay_seconds: float = 1.0
    symbols: tuple[str, ...] = (
        "CRYPTO:BTCUSD",
        "CRYPTO:ETHUSD",
        "CRYPTO:BNBUSD",
        "OANDA:XAUUSD",
        "CRYPTO:SOLUSD",
        "CRYPTO:HYPEHUSD",
        "CRYPTO:XRPUSD",
        "CRYPTO:SUIUSD",
    )
    skip_failed_symbols: bool = False                # abort the cycle by default


@dataclass(frozen=True)
class HistoryParams:
    """History file sink parameters."""
    output_path: str = "tradingdata.json"
    indent: int = 2
    create_dirs: bool = True


@dataclass(frozen=True)
class SessionWindow:
    """Trading session window in UTC hours; may wrap past midnight."""
    name: str
    start_hour: int
    end_hour: int


@dataclass(frozen=True)
class SessionParams:
    """Session table and market-hours rules."""
    windows: tuple[SessionWindow, ...] = (
        SessionWindow("Sydney", 21, 6),
        SessionWindow("Tokyo", 0, 9),
        SessionWindow("London", 7, 16),
        SessionWindow("New York", 12, 21),
    )
    always_open_prefixes: tuple[str, ...] = ("CRYPTO:",)
    weekly_close_weekday: int = 4                    # Friday
    weekly_close_hour: int = 21
    weekly_open_weekday: int = 6                     # Sunday
    weekly_open_hour: int = 21


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    timeframe: TimeframeParams
    indicators: IndicatorParams
    dominance: DominanceParams
    aggregator: AggregatorParams
    pivots: PivotParams
    scanner: ScannerParams
    history: HistoryParams
    sessions: SessionParams = field(default_factory=SessionParams)
    logging: LoggingParams = field(default_factory=LoggingParams)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        timeframe=TimeframeParams(),
        indicators=IndicatorParams(),
        dominance=DominanceParams(),
        aggregator=AggregatorParams(),
        pivots=PivotParams(),
        scanner=ScannerParams(),
        history=HistoryParams(),
        sessions=SessionParams(),
        logging=LoggingParams(),
    )
