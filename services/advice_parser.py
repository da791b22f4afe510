# services/advice_parser.py
from typing import List

from models.analyze_model import ParsedAnalysis

# (marker, label stripped from the line, field) in check order.
# a line feeds only the first marker it contains
MARKERS = [
    ("Suggestion:", "- Suggestion:", "suggestion"),
    ("Emotional Reflection:", "- Emotional Reflection:", "emotional_reflection"),
    ("Keywords:", "- Keywords:", "keywords"),
    ("Sentiment Score:", "- Sentiment Score:", "sentiment_score"),
]


def parse_advice(advice: str, emotion: str) -> ParsedAnalysis:
    """
    Pull the labelled fields out of an advice block such as::

        - Suggestion: Take breaks
        - Emotional Reflection: Feeling overwhelmed is normal
        - Keywords: exam, deadlines
        - Sentiment Score: 3

    Lines are scanned top to bottom and a later line with the same marker
    overwrites the earlier value (last match wins). Unknown labels are
    ignored and missing fields stay empty.
    """
    fields = {
        "suggestion": "",
        "emotional_reflection": "",
        "keywords": "",
        "sentiment_score": "",
    }
    for line in advice.split("\n"):
        for marker, label, name in MARKERS:
            if marker in line:
                fields[name] = line.replace(label, "", 1).strip()
                break
    return ParsedAnalysis(mood=emotion, **fields)


def split_keywords(keywords: str) -> List[str]:
    """"a, b, c" -> ["a", "b", "c"]"""
    if not keywords:
        return []
    return [k.strip() for k in keywords.split(",")]
