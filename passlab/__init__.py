"""PassLab: offline password strength analysis and crack-time estimates."""

from .crack_time import (
    OFFLINE_MODERATE,
    ONLINE,
    SCENARIOS,
    Estimate,
    Scenario,
    estimate,
    format_duration,
    format_range,
    get_scenario,
)
from .evaluator import AnalysisEngine, analyze
from .models import (
    EntropyComponent,
    PasswordAnalysisResult,
    PasswordWarning,
    Severity,
    StrengthCategory,
)
from .wordlist import WordlistStore, load_words

__version__ = "0.1.0"
