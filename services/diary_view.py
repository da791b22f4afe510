# services/diary_view.py
from __future__ import annotations

import os
import re
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from models.analyze_model import AnalysisResult, ParsedAnalysis
from services.advice_parser import parse_advice, split_keywords

logger = logging.getLogger(__name__)

DIARY_PROXY_URL = os.getenv("DIARY_PROXY_URL", "http://localhost:8000")

# shown whenever the proxy can't be reached
MOCK_RESULT = AnalysisResult(
    emotion="sadness",
    advice=(
        "- Suggestion: Take breaks between study sessions and celebrate small wins\n"
        "- Emotional Reflection: Feeling overwhelmed by multiple deadlines is normal, acknowledge your effort\n"
        "- Mood: sadness\n"
        "- Keywords: app, UI, UX, remake, final exam\n"
        "- Sentiment Score: 3\n"
    ),
)

MOOD_EMOJI = {
    "sadness": "😢",
    "joy": "😄",
    "happiness": "😊",
    "anger": "😠",
    "fear": "😨",
    "surprise": "😲",
    "neutral": "😐",
}
UNKNOWN_MOOD_EMOJI = "🤔"

SCORE_LEVELS = 10

LABEL_IDLE = "ANALYZE WITH AI"
LABEL_SUBMITTING = "ANALYZING..."


# =============================================================================
# display helpers
# =============================================================================
def mood_emoji(mood: str) -> str:
    return MOOD_EMOJI.get(mood.lower(), UNKNOWN_MOOD_EMOJI)


def sentiment_level(score: str) -> Optional[int]:
    """Leading integer of the raw score ("7", " 7/10" -> 7), None if there isn't one."""
    m = re.match(r"\s*([+-]?[0-9]+)", score or "")
    return int(m.group(1)) if m else None


def score_bar(score: str) -> List[bool]:
    level = sentiment_level(score)
    if level is None:
        return [False] * SCORE_LEVELS
    return [n <= level for n in range(1, SCORE_LEVELS + 1)]


def panel_sections(analysis: ParsedAnalysis) -> List[Dict[str, Any]]:
    """
    Result panel, top to bottom. MOOD is always there; the other
    sections only when their field is non-empty.
    """
    sections: List[Dict[str, Any]] = [
        {"title": "MOOD", "emoji": mood_emoji(analysis.mood), "text": analysis.mood},
    ]
    if analysis.suggestion:
        sections.append({"title": "SUGGESTION", "text": analysis.suggestion})
    if analysis.emotional_reflection:
        sections.append({"title": "EMOTIONAL REFLECTION", "text": analysis.emotional_reflection})
    if analysis.keywords:
        sections.append({"title": "KEYWORDS", "tags": split_keywords(analysis.keywords)})
    if analysis.sentiment_score:
        sections.append({
            "title": "SENTIMENT SCORE",
            "bar": score_bar(analysis.sentiment_score),
            "text": f"{analysis.sentiment_score} / {SCORE_LEVELS}",
        })
    return sections


# =============================================================================
# view state
# =============================================================================
class ViewStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState:
    status: ViewStatus = ViewStatus.IDLE
    text: str = ""
    analysis: Optional[ParsedAnalysis] = None

    @property
    def can_submit(self) -> bool:
        return self.status != ViewStatus.SUBMITTING and bool(self.text.strip())

    @property
    def button_label(self) -> str:
        return LABEL_SUBMITTING if self.status == ViewStatus.SUBMITTING else LABEL_IDLE


def reduce(state: ViewState, event: str, payload: Any = None) -> ViewState:
    """
    Events:
      edit(text)         -> buffer updated, status kept
      submit             -> submitting (ignored if can_submit is False)
      succeed(analysis)  -> success
      fail(analysis)     -> failed, analysis is the parsed mock
    """
    if event == "edit":
        return replace(state, text=payload or "")
    if event == "submit":
        if not state.can_submit:
            return state
        return replace(state, status=ViewStatus.SUBMITTING)
    if event == "succeed":
        return replace(state, status=ViewStatus.SUCCESS, analysis=payload)
    if event == "fail":
        return replace(state, status=ViewStatus.FAILED, analysis=payload)
    raise ValueError(f"unknown event: {event}")


# =============================================================================
# proxy client + page
# =============================================================================
class ProxyClient:
    def __init__(self, base_url: str = DIARY_PROXY_URL,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def analyze(self, text: str) -> AnalysisResult:
        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
            resp = await client.post("/api/analyze", json={"text": text})
            resp.raise_for_status()
            return AnalysisResult.model_validate(resp.json())


class DiaryView:
    """One diary page: text buffer, a single in-flight analysis, result panel."""

    def __init__(self, client: Optional[ProxyClient] = None):
        self.client = client or ProxyClient()
        self.state = ViewState()

    def edit(self, text: str) -> ViewState:
        self.state = reduce(self.state, "edit", text)
        return self.state

    @property
    def sections(self) -> List[Dict[str, Any]]:
        if self.state.analysis is None:
            return []
        return panel_sections(self.state.analysis)

    async def submit(self) -> ViewState:
        if not self.state.can_submit:
            return self.state
        self.state = reduce(self.state, "submit")
        try:
            result = await self.client.analyze(self.state.text)
        except Exception as e:
            # never surfaced to the user: the mock stands in
            logger.warning("diary analysis failed, showing mock result: %r", e)
            self._fall_back()
        else:
            parsed = parse_advice(result.advice, result.emotion)
            self.state = reduce(self.state, "succeed", parsed)
        finally:
            # cancelled mid-flight: release the trigger anyway
            if self.state.status == ViewStatus.SUBMITTING:
                self._fall_back()
        return self.state

    def _fall_back(self) -> None:
        parsed = parse_advice(MOCK_RESULT.advice, MOCK_RESULT.emotion)
        self.state = reduce(self.state, "fail", parsed)
