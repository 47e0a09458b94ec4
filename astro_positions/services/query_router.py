import logging
import math
from typing import Any, Optional, Tuple

from astro_positions.config import settings

logger = logging.getLogger(__name__)


class QueryRouter:
    """
    Routes a chat message to one fixed guidance text and wraps it with a
    one-line summary of the client's chart.
    """

    # Checked in order; first topic with a matching keyword wins.
    TOPICS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
        (
            ("career", "work"),
            "Your MC and 10th house themes illuminate your public path. "
            "Consider the sign on your Midheaven and any planets in the 10th.",
        ),
        (
            ("love", "relationship"),
            "Look to Venus and the 7th house for partnership patterns. "
            "The ruler of the 7th and aspects to Venus offer further nuance.",
        ),
        (
            ("purpose", "life"),
            "Your Sun’s sign and house show core vitality; "
            "the North Node can hint at a growth trajectory.",
        ),
        (
            ("health", "wellbeing"),
            "The 6th house and its ruler speak to daily rhythms and care. "
            "Observe planets there for habits that support you.",
        ),
    )

    FALLBACK = (
        "Ask about love, career, purpose, timing, or any part of your chart "
        "you’re drawn to. I will focus my reading accordingly."
    )

    SEPARATOR = " • "

    def __init__(self, persona: Optional[str] = None):
        self.persona = persona or settings.CHAT_PERSONA

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def compose(self, message: Any, chart: Any) -> str:
        summary = self.summarize(chart)
        guidance = self.route(message)
        return (
            f"{self.persona}: I see your chart: {summary}. "
            f"{guidance} What would you like to explore next?"
        )

    def route(self, message: Any) -> str:
        text = str(message).lower()
        for keywords, guidance in self.TOPICS:
            if any(k in text for k in keywords):
                return guidance
        return self.FALLBACK

    def summarize(self, chart: Any) -> str:
        """
        "Sun 166.12° Virgo H9 • Moon ... • Asc ..."; missing parts are
        skipped and any malformed chart yields "".
        """
        try:
            planets = chart.get("planets") or []
            sun = self._find(planets, "Sun")
            moon = self._find(planets, "Moon")
            angles = chart.get("angles") or {}
            asc = angles.get("asc")

            parts = []
            if sun:
                parts.append(self._format_body("Sun", sun))
            if moon:
                parts.append(self._format_body("Moon", moon))
            if asc:
                parts.append(f"Asc {_fmt_deg(asc.get('degree'))} {asc.get('sign')}")
            return self.SEPARATOR.join(parts)
        except Exception as e:
            logger.debug("Chart summary skipped: %s", e)
            return ""

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    @staticmethod
    def _find(planets, name: str):
        return next(
            (p for p in planets if isinstance(p, dict) and p.get("name") == name),
            None,
        )

    @staticmethod
    def _format_body(label: str, body: dict) -> str:
        house = body.get("house")
        house_str = "-" if house is None else house
        return f"{label} {_fmt_deg(body.get('degree'))} {body.get('sign')} H{house_str}"


def _fmt_deg(x: Any) -> str:
    if isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x):
        return f"{x:.2f}°"
    return "-"
