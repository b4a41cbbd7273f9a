"""Heuristic spam scoring for guest wishes.

The score is advisory: a wish that looks like spam is held for moderation
instead of being published, it is never rejected.
"""

import re
from dataclasses import dataclass, field

DEFAULT_SPAM_THRESHOLD = 5

URL_WEIGHT = 4
KEYWORD_WEIGHT = 3

URL_PATTERNS = [
    re.compile(r"https?://[^\s]+", re.IGNORECASE),
    re.compile(r"www\.[^\s]+", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9][a-zA-Z0-9-]{1,61}[a-zA-Z0-9]\.[a-zA-Z]{2,}", re.IGNORECASE),
]

SPAM_KEYWORDS = [
    "click here",
    "buy now",
    "free money",
    "winner",
    "congratulations you won",
    "viagra",
    "casino",
    "lottery",
    "debt",
    "credit card",
    "loan",
    "investment",
    "make money",
    "work from home",
    "get rich",
    "limited time",
    "act now",
]

PUNCTUATION = re.compile(r"[!@#$%^&*()_+=\[\]{}|;:,.<>?]")
DIGITS_AND_SPECIAL = re.compile(r"[0-9@#$%^&*()_+=\[\]{}|;:,.<>?]")
UPPERCASE = re.compile(r"[A-Z]")
REPEATED_CHARACTER = re.compile(r"(.)\1{4,}")


@dataclass(frozen=True)
class SpamVerdict:
    is_spam: bool
    spam_score: int
    reasons: list[str] = field(default_factory=list)


def detect_spam(
    message: str, name: str, threshold: int = DEFAULT_SPAM_THRESHOLD
) -> SpamVerdict:
    score = 0
    reasons: list[str] = []
    text = f"{name} {message}".lower()
    length = len(message)

    for pattern in URL_PATTERNS:
        matches = pattern.findall(text)
        if matches:
            score += len(matches) * URL_WEIGHT
            if "Contains URLs or web addresses" not in reasons:
                reasons.append("Contains URLs or web addresses")

    for keyword in SPAM_KEYWORDS:
        if keyword in text:
            score += KEYWORD_WEIGHT
            reasons.append(f"Contains spam keyword: {keyword}")

    if length > 20 and len(UPPERCASE.findall(message)) / length > 0.7:
        score += 2
        reasons.append("Excessive use of capital letters")

    punctuation = len(PUNCTUATION.findall(message))
    if punctuation > length * 0.3 and punctuation > 10:
        score += 2
        reasons.append("Excessive punctuation")

    if REPEATED_CHARACTER.search(message):
        score += 1
        reasons.append("Contains repeated characters")

    if len(message.strip()) < 10:
        score += 1
        reasons.append("Message too short")

    if length > 1000:
        score += 1
        reasons.append("Message too long")

    if length > 20 and len(DIGITS_AND_SPECIAL.findall(message)) / length > 0.5:
        score += 2
        reasons.append("Too many numbers and special characters")

    return SpamVerdict(is_spam=score > threshold, spam_score=score, reasons=reasons)
