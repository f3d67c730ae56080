"""
passlab.evaluator

Password strength evaluator:
- baseline_entropy(password): length * log2(effective alphabet size)
- detectors: repeated runs, repeated substrings, sequential runs, keyboard
  rows, common passwords, predictable capitalization, common suffixes
- AnalysisEngine.analyze(password): returns a PasswordAnalysisResult with
  final entropy bits, category, meter value, warnings and the breakdown of
  every adjustment that was applied
- analyze(password): the same, using an engine without a word list

The evaluator is pure. It never stores or logs the password.
"""

import logging
import math
import re
from typing import FrozenSet, Iterable, List, Optional, Set

from .models import (
    EntropyComponent,
    PasswordAnalysisResult,
    PasswordWarning,
    Severity,
    StrengthCategory,
)
from .wordlist import WordlistStore

logger = logging.getLogger(__name__)

# only line breaks are trimmed; other whitespace counts as a symbol
NEWLINES = "\n\r\x0b\x0c\x85\u2028\u2029"

CLASS_SIZES = {"lower": 26, "upper": 26, "digit": 10, "symbol": 33}

KEYBOARD_ROWS = ("qwertyuiop", "asdfghjkl", "zxcvbnm", "1234567890")

# small built-in list, independent of the bundled word list
COMMON_PASSWORDS = frozenset({
    "password", "passw0rd", "123456", "12345678", "123456789", "qwerty",
    "letmein", "admin", "welcome", "iloveyou", "monkey", "dragon",
    "football", "secret", "login", "princess", "sunshine",
})

ASCII_DIGITS = "0123456789"

# suffixes that add next to nothing on top of a dictionary word
TRIVIAL_SUFFIXES = frozenset({
    "1", "12", "123", "1234", "12345",
    "0", "00", "000", "0000",
    "11", "111", "1111",
    "22", "222", "2222",
    "99", "999", "9999",
})

METER_CAP_BITS = 80.0

BASELINE_LABEL = "Baseline (length × log2(alphabet))"

_DIGIT_SUFFIX_RE = re.compile(r"[0-9]{1,4}\Z")


def character_classes(password: str) -> FrozenSet[str]:
    """Set of classes present: lower/upper/digit are ASCII only, the rest is 'symbol'."""
    classes: Set[str] = set()
    for c in password:
        if "a" <= c <= "z":
            classes.add("lower")
        elif "A" <= c <= "Z":
            classes.add("upper")
        elif "0" <= c <= "9":
            classes.add("digit")
        else:
            classes.add("symbol")
    return frozenset(classes)


def alphabet_size(classes: Iterable[str]) -> int:
    size = sum(CLASS_SIZES[c] for c in set(classes))
    return max(1, size)


def baseline_entropy(password: str) -> float:
    """
    Entropy assuming uniform random choice from the effective alphabet:
    length * log2(sum of class sizes present).
    """
    if not password:
        return 0.0
    return len(password) * math.log2(alphabet_size(character_classes(password)))


def has_repeated_run(password: str, run_length: int = 3) -> bool:
    """True when some character repeats run_length times in a row ('aaa', '111')."""
    if run_length < 2:
        return False
    last = None
    run = 0
    for c in password:
        if c == last:
            run += 1
            if run >= run_length:
                return True
        else:
            last = c
            run = 1
    return False


def smallest_repeat_period(password: str) -> Optional[int]:
    """
    Smallest p such that the password is one chunk of length p repeated,
    e.g. 'abcabc' -> 3, 'abab' -> 2. None for shorter than 4 characters
    or when no such chunk exists.
    """
    n = len(password)
    if n < 4:
        return None
    for p in range(1, n // 2 + 1):
        if n % p:
            continue
        if all(password[i] == password[i % p] for i in range(n)):
            return p
    return None


def find_sequential_run(password: str, min_length: int = 4) -> Optional[str]:
    """
    First run of at least min_length characters whose ASCII codes go up by
    one each step ('abcd', '4567'). Case-insensitive; the run is returned
    lowercased.
    """
    chars = password.lower()
    n = len(chars)
    if n < min_length:
        return None

    def is_next(a: str, b: str) -> bool:
        if not (a.isascii() and b.isascii()):
            return False
        return ord(b) == ord(a) + 1

    start = 0
    for i in range(1, n):
        if is_next(chars[i - 1], chars[i]):
            continue
        if i - start >= min_length:
            return chars[start:i]
        start = i
    if n - start >= min_length:
        return chars[start:]
    return None


def _longest_contained(password: str, row: str, min_length: int) -> Optional[str]:
    for length in range(len(row), min_length - 1, -1):
        for start in range(0, len(row) - length + 1):
            sub = row[start:start + length]
            if sub in password:
                return sub
    return None


def find_keyboard_sequence(password: str, min_length: int = 4) -> Optional[str]:
    """
    Longest run of a keyboard row (forward or reversed) found in the password.
    Rows are tried in KEYBOARD_ROWS order, forward before reversed, and the
    first row with any match wins.
    """
    lower = password.lower()
    for row in KEYBOARD_ROWS:
        for candidate in (row, row[::-1]):
            match = _longest_contained(lower, candidate, min_length)
            if match:
                return match
    return None


def is_common_password(password: str) -> bool:
    lower = password.lower()
    if lower in COMMON_PASSWORDS:
        return True
    # '0000', '7777777' and friends
    if lower and all(c in ASCII_DIGITS for c in lower) and len(set(lower)) == 1:
        return True
    return False


def is_capitalized_first_only(password: str) -> bool:
    """'Summer2024' style: uppercase first character, every later letter lowercase."""
    if len(password) < 2 or not password[0].isupper():
        return False
    letters = [c for c in password[1:] if c.isalpha()]
    return bool(letters) and all(c.islower() for c in letters)


def common_suffix_pattern(password: str) -> Optional[str]:
    """
    Return the predictable suffix ('!' or trailing 1-4 digits) or None.
    A 19xx/20xx year suffix is four trailing digits, so it lands in the
    digit case.
    """
    lower = password.lower()
    if lower.endswith("!"):
        return "!"
    m = _DIGIT_SUFFIX_RE.search(lower)
    if m:
        return m.group(0)
    return None


def segment_into_words(text: str, words: FrozenSet[str], max_words: int = 4,
                       min_word_len: int = 3, max_word_len: int = 20) -> Optional[List[str]]:
    """
    Split text into at most max_words dictionary words, preferring the
    split with the fewest words. Returns None when no full split exists.
    """
    n = len(text)
    if n == 0:
        return None
    best: List[Optional[List[str]]] = [None] * (n + 1)
    best[0] = []
    for i in range(n):
        current = best[i]
        if current is None or len(current) >= max_words:
            continue
        upper = min(max_word_len, n - i)
        for length in range(upper, min_word_len - 1, -1):
            candidate = text[i:i + length]
            if candidate not in words:
                continue
            proposal = current + [candidate]
            nxt = i + length
            if best[nxt] is None or len(proposal) < len(best[nxt]):
                best[nxt] = proposal
    return best[n]


def estimate_suffix_bits(suffix: str) -> float:
    """Rough entropy of a numeric suffix appended to dictionary words."""
    if not suffix:
        return 0.0
    if suffix in TRIVIAL_SUFFIXES:
        return 0.5
    if len(suffix) == 4 and suffix.isdigit() and 1900 <= int(suffix) <= 2099:
        return math.log2(200)
    return min(20.0, math.log2(10.0 ** len(suffix)))


def category_for_bits(bits: float) -> StrengthCategory:
    if bits < 28:
        return StrengthCategory.VERY_WEAK
    if bits < 36:
        return StrengthCategory.WEAK
    if bits < 60:
        return StrengthCategory.FAIR
    return StrengthCategory.STRONG


def meter_value(bits: float) -> float:
    return min(METER_CAP_BITS, max(0.0, bits)) / METER_CAP_BITS


def dedupe_warnings(warnings: Iterable[PasswordWarning]) -> List[PasswordWarning]:
    """Drop warnings whose id was already seen; first occurrence wins."""
    seen: Set[str] = set()
    out: List[PasswordWarning] = []
    for w in warnings:
        if w.id in seen:
            continue
        seen.add(w.id)
        out.append(w)
    return out


def empty_result() -> PasswordAnalysisResult:
    return PasswordAnalysisResult(
        password_length=0,
        entropy_bits=0.0,
        category=StrengthCategory.VERY_WEAK,
        meter_value=0.0,
        warnings=(
            PasswordWarning(
                id="empty",
                title="Enter a password",
                detail="Analysis updates as you type. Nothing is stored or sent.",
                severity=Severity.INFO,
            ),
        ),
        breakdown=(EntropyComponent("Baseline", 0.0),),
    )


class AnalysisEngine:
    """
    Heuristic password scorer.

    Without a word list the engine applies the fixed rule table only. When
    given a WordlistStore with a non-empty list it also estimates
    letters(+digits) passwords as a handful of dictionary words.
    """

    def __init__(self, wordlist: Optional[WordlistStore] = None):
        self.wordlist = wordlist

    def analyze(self, password: str) -> PasswordAnalysisResult:
        """
        Length is counted in code points, not user-perceived characters:
        an emoji with a skin-tone modifier or a ZWJ sequence counts as
        several characters.
        """
        text = password.strip(NEWLINES)
        length = len(text)
        if length == 0:
            return empty_result()

        warnings: List[PasswordWarning] = []
        adjustments: List[EntropyComponent] = []

        baseline = baseline_entropy(text)

        def flag(key: str, title: str, detail: str, severity: Severity,
                 label: Optional[str] = None, bits: float = 0.0) -> None:
            warnings.append(PasswordWarning(key, title, detail, severity))
            if label is not None:
                adjustments.append(EntropyComponent(label, bits))

        # length guidance, warning only
        if length < 8:
            flag("too_short_8", "Too short",
                 "Under 8 characters is highly guessable. Aim for 12+.",
                 Severity.CRITICAL)
        elif length < 12:
            flag("short_12", "Consider a longer password",
                 "12+ characters significantly increases resistance to guessing.",
                 Severity.WARNING)

        if len(character_classes(text)) == 1:
            flag("single_class", "Low character variety",
                 "Using only one character type reduces the search space (e.g., only digits).",
                 Severity.WARNING,
                 "Deduction: single character class", -min(12.0, baseline * 0.25))

        if has_repeated_run(text, 3):
            flag("repeat_run", "Repeated characters",
                 "Runs like “aaa” or “111” are common patterns and easier to guess.",
                 Severity.WARNING,
                 "Deduction: repeated character runs", -min(10.0, baseline * 0.15))

        period = smallest_repeat_period(text)
        if period is not None and period < length:
            flag("repeat_substring", "Repeated pattern",
                 "Repeating a short chunk reduces effective complexity.",
                 Severity.WARNING,
                 "Deduction: repeated substring pattern", -min(14.0, baseline * 0.20))

        run = find_sequential_run(text, 4)
        if run:
            flag("sequential_run", "Sequential characters",
                 f"Sequences like “{run}” are frequently tried by attackers.",
                 Severity.WARNING,
                 "Deduction: sequential run", -min(12.0, baseline * 0.18))

        seq = find_keyboard_sequence(text, 4)
        if seq:
            flag("keyboard_sequence", "Keyboard pattern",
                 f"Keyboard sequences like “{seq}” are among the most common choices.",
                 Severity.CRITICAL,
                 "Deduction: keyboard sequence", -min(18.0, baseline * 0.30))

        if is_common_password(text):
            list_bits = math.log2(len(COMMON_PASSWORDS))
            flag("common_password", "Common password",
                 "This matches common-password lists. Attackers try these early.",
                 Severity.CRITICAL,
                 "Deduction: common-password list match", -max(0.0, baseline - list_bits))

        if is_capitalized_first_only(text):
            flag("capitalized_first", "Predictable capitalization",
                 "Capitalizing only the first letter is a common transformation.",
                 Severity.INFO,
                 "Deduction: predictable capitalization", -min(6.0, baseline * 0.08))

        suffix = common_suffix_pattern(text)
        if suffix is not None:
            flag("common_suffix", "Common suffix pattern",
                 f"Suffixes like “{suffix}” are commonly targeted by rule-based guesses.",
                 Severity.WARNING,
                 "Deduction: common suffix pattern", -min(10.0, baseline * 0.12))

        if self.wordlist is not None:
            self._dictionary_adjustment(text, baseline, warnings, adjustments)

        final_bits = max(0.0, baseline + sum(a.bits for a in adjustments))
        result = PasswordAnalysisResult(
            password_length=length,
            entropy_bits=final_bits,
            category=category_for_bits(final_bits),
            meter_value=meter_value(final_bits),
            warnings=tuple(dedupe_warnings(warnings)),
            breakdown=(EntropyComponent(BASELINE_LABEL, baseline),) + tuple(adjustments),
        )
        logger.debug("analysed length=%d bits=%.1f rules=%s",
                     length, final_bits, ",".join(result.warning_ids))
        return result

    def _dictionary_adjustment(self, text: str, baseline: float,
                               warnings: List[PasswordWarning],
                               adjustments: List[EntropyComponent]) -> None:
        """
        Re-estimate 'letters + optional digits' passwords as k words drawn
        from the word list plus a suffix, and record the difference.
        """
        words, count = self.wordlist.load_words()
        if count == 0:
            return
        lower = text.lower()
        prefix_len = 0
        while prefix_len < len(lower) and lower[prefix_len].isalpha():
            prefix_len += 1
        letters, digits = lower[:prefix_len], lower[prefix_len:]
        if len(letters) < 4:
            return
        if digits and not all(c in ASCII_DIGITS for c in digits):
            return

        segmentation = segment_into_words(letters, words, max_words=4)
        if not segmentation:
            return

        k = len(segmentation)
        passphrase_bits = k * math.log2(count) + estimate_suffix_bits(digits)
        if k == 1:
            warnings.append(PasswordWarning(
                "dictionary_word_single", "Single dictionary word",
                "Single common words are often targeted early by wordlist attacks. "
                "Consider multiple unrelated words.",
                Severity.WARNING,
            ))
        else:
            warnings.append(PasswordWarning(
                "dictionary_words", "Dictionary words detected",
                f"This looks like combined common words (e.g., “{' + '.join(segmentation)}”). "
                "Wordlist attacks can guess these faster than random strings.",
                Severity.CRITICAL,
            ))
        plural = "" if k == 1 else "s"
        adjustments.append(EntropyComponent(
            f"Adjustment: wordlist estimate ({k} word{plural} from ~{count})",
            passphrase_bits - baseline,
        ))


_default_engine = AnalysisEngine()


def analyze(password: str) -> PasswordAnalysisResult:
    """Analyse with the fixed rule table only (no word list)."""
    return _default_engine.analyze(password)
