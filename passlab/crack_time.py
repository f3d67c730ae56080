"""
passlab.crack_time

Turns entropy bits into a time-to-crack figure for an attacker scenario:
- estimate(bits, scenario): expected (half the space) and worst-case
  (whole space) seconds at the scenario's guess rate
- format_duration(seconds) / format_range(expected, worst): short labels
  such as "Instant", "42m", "3mo", "1,204y", ">10,000y"
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

MINUTE = 60.0
HOUR = 60.0 * MINUTE
DAY = 24.0 * HOUR
YEAR = 365.0 * DAY

YEARS_CAP = 10_000


def _as_rate(value) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValueError("guesses_per_second must be a number")
    try:
        return float(value)
    except OverflowError:
        raise ValueError("guesses_per_second is too large") from None


@dataclass(frozen=True)
class Scenario:
    id: str
    title: str
    guesses_per_second: float
    footnote: Optional[str] = None

    def __post_init__(self):
        rate = _as_rate(self.guesses_per_second)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError("guesses_per_second must be a positive, finite number")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "guesses_per_second": self.guesses_per_second,
            "footnote": self.footnote,
        }


ONLINE = Scenario(
    id="online",
    title="Online (rate-limited)",
    guesses_per_second=100,
    footnote="Assumes throttling/lockouts. Real sites vary. 100 guesses per second.",
)

OFFLINE_MODERATE = Scenario(
    id="offlineModerate",
    title="Offline (moderately powerful)",
    guesses_per_second=1_000_000_000,
    footnote="Assumes fast hashing. Slow hashes (bcrypt/scrypt/Argon2) take much longer. "
             "1 billion guesses per second.",
)

SCENARIOS: Dict[str, Scenario] = {s.id: s for s in (ONLINE, OFFLINE_MODERATE)}


def get_scenario(scenario_id: str) -> Scenario:
    """Look up a canonical scenario; KeyError for unknown ids."""
    try:
        return SCENARIOS[scenario_id]
    except KeyError:
        raise KeyError(f"unknown scenario '{scenario_id}' (choose from: {', '.join(SCENARIOS)})") from None


def custom_scenario(guesses_per_second: float) -> Scenario:
    """Scenario for an arbitrary rate; ValueError unless it is a positive, finite number."""
    rate = _as_rate(guesses_per_second)
    return Scenario(
        id="custom",
        title=f"Custom ({rate:,.0f} guesses/s)",
        guesses_per_second=rate,
    )


@dataclass(frozen=True)
class Estimate:
    expected_seconds: float  # 0.5 * 2^bits / rate
    worst_seconds: float     # 1.0 * 2^bits / rate

    def describe(self) -> str:
        return format_range(self.expected_seconds, self.worst_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            # JSON has no infinity; null means "beyond float range"
            "expected_seconds": _finite_or_none(self.expected_seconds),
            "worst_seconds": _finite_or_none(self.worst_seconds),
            "expected": format_duration(self.expected_seconds),
            "worst": format_duration(self.worst_seconds),
            "summary": self.describe(),
        }


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def estimate(entropy_bits: float, scenario: Scenario) -> Estimate:
    if not entropy_bits > 0:
        return Estimate(0.0, 0.0)
    try:
        space = 2.0 ** entropy_bits
    except OverflowError:
        space = math.inf
    rate = scenario.guesses_per_second
    return Estimate(0.5 * space / rate, 1.0 * space / rate)


def _round(value: float) -> int:
    # half away from zero; round() would pick the even neighbour
    return int(math.floor(value + 0.5))


def format_duration(seconds: float) -> str:
    if not math.isfinite(seconds):
        return "Effectively never"
    if seconds <= 1:
        return "Instant"
    if seconds < MINUTE:
        return f"{_round(seconds)}s"
    if seconds < HOUR:
        return f"{_round(seconds / MINUTE)}m"
    if seconds < DAY:
        return f"{_round(seconds / HOUR)}h"
    if seconds < YEAR:
        days = seconds / DAY
        if days < 45:
            return f"{_round(days)}d"
        return f"{_round(days / 30)}mo"
    years = seconds / YEAR
    if years < YEARS_CAP:
        return f"{_round(years):,}y"
    return f">{YEARS_CAP:,}y"


def format_range(expected_seconds: float, worst_seconds: float) -> str:
    e = format_duration(expected_seconds)
    w = format_duration(worst_seconds)
    if e == w:
        return e
    return f"{e} avg & {w} worst"
