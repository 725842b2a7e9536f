from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .entities import RainVerdict


@dataclass(frozen=True)
class RainReport:
    """What a sink shows: the verdict rendered for humans."""

    answer: str
    details: str
    facts: Tuple[str, ...]
    samples: Tuple[str, ...]
    label: str
    verdict: RainVerdict

    def as_dict(self) -> Dict[str, Any]:
        verdict = self.verdict
        return {
            "answer": self.answer,
            "details": self.details,
            "facts": list(self.facts),
            "samples": list(self.samples),
            "label": self.label,
            "rained": verdict.rained,
            "total_rain_mm": verdict.total_rain_mm,
            "hours_with_rain": verdict.hours_with_rain,
            "hours_checked": verdict.hours_checked,
            "last_hour_checked": verdict.last_hour_checked,
            "timezone": verdict.timezone_name,
        }


def render_report(verdict: RainVerdict, label: str = "") -> RainReport:
    facts = (
        f"Total rain: {verdict.total_rain_mm} mm",
        f"Rainy hours: {verdict.hours_with_rain}/24",
        f"Timezone: {verdict.timezone_name}",
    )
    where = f" for {label}" if label else ""
    sentences = [f"Based on hourly observations in the previous 24 hours{where}."]
    if verdict.last_hour_checked:
        sentences.append(
            f"Last hour checked: {verdict.last_hour_checked} ({verdict.timezone_name})."
        )
    return RainReport(
        answer="YES" if verdict.rained else "NO",
        details=" ".join(sentences),
        facts=facts,
        samples=verdict.sample_hours,
        label=label,
        verdict=verdict,
    )


def format_report_text(report: RainReport) -> str:
    lines = [report.answer, report.details, " | ".join(report.facts)]
    lines.extend(f"  - {sample}" for sample in report.samples)
    return "\n".join(lines)


__all__ = ["RainReport", "format_report_text", "render_report"]
