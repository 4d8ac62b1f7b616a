from __future__ import annotations

from dataclasses import dataclass

from reelscore.models import AnalysisResult

# (minimum display score, description), checked top-down.
HOOK_DESCRIPTIONS = (
    (9, "Powerful opening that grabs attention instantly"),
    (7, "Strong hook, most viewers will stay"),
    (5, "Decent hook but not attention-grabbing enough"),
    (3, "Weak hook, most viewers will scroll past"),
    (1, "Very weak hook, viewers will scroll immediately"),
    (0, "No hook at all, a static opening will kill your reach"),
)
PACING_DESCRIPTIONS = (
    (9, "Extremely dynamic, short-form perfect pacing"),
    (7, "Good pacing that keeps viewers watching"),
    (5, "Moderate pacing, could be tighter"),
    (3, "Slow pacing, viewers will lose interest"),
    (1, "Very slow, almost no cuts or transitions"),
    (0, "Completely static, needs editing badly"),
)
LENGTH_DESCRIPTIONS = (
    (9, "Perfect length for maximum completion rate"),
    (7, "Good length, most viewers will finish watching"),
    (5, "Acceptable length but completion rate will drop"),
    (3, "Too long, completion rate will be very low"),
    (1, "Way too long, low completion gets penalized"),
    (0, "Extremely long, almost no one will watch to the end"),
)
QUALITY_DESCRIPTIONS = (
    (9, "Excellent, HD vertical with stable footage"),
    (7, "Good quality with proper vertical format"),
    (5, "Acceptable quality, some issues with format or stability"),
    (3, "Below average, wrong format or low resolution"),
    (1, "Poor quality, hurting your reach significantly"),
    (0, "Very poor quality, upgrade your recording setup"),
)

SUGGESTION_THRESHOLD = 7
MAX_TOP_ISSUES = 3


@dataclass(slots=True)
class CategoryFeedback:
    category: str
    score: int
    description: str
    suggestions: list[str]


def describe(score: int, table: tuple[tuple[int, str], ...]) -> str:
    for minimum, description in table:
        if score >= minimum:
            return description
    return table[-1][1]


def hook_suggestions(result: AnalysisResult) -> list[str]:
    score = result.display.hook
    if score >= SUGGESTION_THRESHOLD:
        return []
    if score <= 2:
        tips = [
            "Start with the end result and show the 'after' first",
            "Add bold text in the first frame: 'Wait for it...'",
            "Use a shocking visual or fast movement immediately",
            "This is your top priority; nothing else matters if people scroll past",
        ]
    elif score <= 4:
        tips = [
            "Add a bold text overlay in the first frame",
            "Start with the most dramatic moment",
            "Try a trending transition that starts in frame 1",
        ]
    else:
        tips = [
            "Make the first second more visually striking",
            "Use a question or surprising statement to open",
        ]
    if result.is_slideshow:
        tips.append("Lead with your most eye-catching photo")
    return tips


def pacing_suggestions(result: AnalysisResult) -> list[str]:
    score = result.display.pacing
    if score >= SUGGESTION_THRESHOLD:
        return []
    if score <= 2:
        tips = [
            "Add more cuts; aim for one every 2-3 seconds",
            "Speed up the video 1.2-1.5x",
            "Show multiple angles of the same action",
            "Add text overlays that change every 3-4 seconds",
        ]
    elif score <= 4:
        tips = [
            "Add more cuts and transitions between scenes",
            "Use jump cuts to remove dead space",
            "Show multiple angles of the same moment",
        ]
    else:
        tips = [
            "Tighten your edits and remove any pauses or dead time",
            "Add visual variety to maintain interest",
        ]
    if result.is_slideshow:
        tips.append("Use shorter slide durations (2s per slide)")
    return tips


def length_suggestions(result: AnalysisResult) -> list[str]:
    if result.display.length >= SUGGESTION_THRESHOLD:
        return []
    duration = result.metadata.duration_seconds
    tips: list[str] = []
    if duration > 60:
        tips += [
            "Trim to 30 seconds or less; the current length kills completion rate",
            "Cut out any filler or slow moments",
            "Save longer content for long-form platforms",
        ]
    elif duration > 45:
        tips += ["Trim to 30 seconds or less for maximum retention", "Cut out the slow middle section"]
    elif duration > 30:
        tips += ["Cut to under 30 seconds; every second counts", "Get to the point faster"]
    elif duration < 5:
        tips.append("Add a bit more content, at least 7 seconds")
    tips.append("Make every single second earn its place")
    return tips


def quality_suggestions(result: AnalysisResult) -> list[str]:
    score = result.display.quality
    if score >= SUGGESTION_THRESHOLD:
        return []
    tips: list[str] = []
    if score <= 3:
        tips += ["Film in 1080p or higher resolution", "Ensure good lighting; natural light works best"]
    metadata = result.metadata
    if metadata.width >= metadata.height:
        tips.append("Crop to vertical 9:16 format")
    if score <= 5:
        tips.append("Keep the camera steady or use stabilization")
    return tips


def category_feedback(result: AnalysisResult) -> list[CategoryFeedback]:
    display = result.display
    return [
        CategoryFeedback("Hook Strength", display.hook, describe(display.hook, HOOK_DESCRIPTIONS), hook_suggestions(result)),
        CategoryFeedback("Pacing", display.pacing, describe(display.pacing, PACING_DESCRIPTIONS), pacing_suggestions(result)),
        CategoryFeedback("Video Length", display.length, _length_description(result), length_suggestions(result)),
        CategoryFeedback(
            "Production Quality",
            display.quality,
            describe(display.quality, QUALITY_DESCRIPTIONS),
            quality_suggestions(result),
        ),
    ]


def top_issues(result: AnalysisResult, limit: int = MAX_TOP_ISSUES) -> list[CategoryFeedback]:
    """Weakest categories that have something to fix, lowest score first."""

    actionable = [item for item in category_feedback(result) if item.suggestions]
    return sorted(actionable, key=lambda item: item.score)[:limit]


def _length_description(result: AnalysisResult) -> str:
    if result.metadata.duration_seconds <= 15:
        if result.display.length >= 8:
            return "Perfect length, high completion rate and rewatchability"
        return "Short but may need more substance"
    return describe(result.display.length, LENGTH_DESCRIPTIONS)
