"""
Lead-quiz scoring.

Experience (question 2) dominates the score; the chart test, the stop-loss
scenario and self-assessment add bonus points. The level decides the
recommended plan, with the monthly budget breaking the tie for
experienced traders.
"""

from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel

Level = Literal["einsteiger", "fortgeschrittener_einsteiger", "erfahren", "fortgeschritten"]
Plan = Literal["free", "academy", "elite"]

EXPERIENCE_POINTS = {
    "never": 0,
    "months": 25,
    "year_plus": 50,
    "profitable": 80,
}

# Single-choice answers that feed the score or the recommendation
SCORED_ANSWER_KEYS = ("2", "5", "6", "8", "11")

# (question key, answer, points)
BONUS_POINTS = [
    ("5", "correct", 10),
    ("6", "hold_stop", 10),
    ("8", "advanced", 15),
]

# Upper score bound (exclusive) per level, checked in order
LEVEL_THRESHOLDS = [
    (20, "einsteiger"),
    (45, "fortgeschrittener_einsteiger"),
    (70, "erfahren"),
]
TOP_LEVEL: Level = "fortgeschritten"


class Recommendation(BaseModel):
    primary: Plan
    secondary: Optional[Plan] = None


class QuizResult(BaseModel):
    """Outcome shown on the results page."""
    score: int
    level: Level
    levelLabel: str
    description: str
    strengths: List[str]
    weaknesses: List[str]
    recommendation: Recommendation


LEVEL_PROFILES = {
    "einsteiger": {
        "levelLabel": "Einsteiger",
        "description": (
            "Du stehst noch am Anfang deiner Trading-Reise. Das ist der beste "
            "Zeitpunkt, um die richtigen Grundlagen zu lernen."
        ),
        "strengths": ["Motivation zum Lernen", "Keine schlechten Gewohnheiten"],
        "weaknesses": ["Grundwissen fehlt", "Keine Strategie vorhanden"],
    },
    "fortgeschrittener_einsteiger": {
        "levelLabel": "Fortgeschrittener Einsteiger",
        "description": (
            "Du hast Grundwissen, aber kämpfst noch mit Konsistenz und "
            "emotionalen Entscheidungen."
        ),
        "strengths": ["Grundverständnis vorhanden", "Bereit Zeit zu investieren"],
        "weaknesses": ["Emotionales Trading", "Keine feste Strategie"],
    },
    "erfahren": {
        "levelLabel": "Erfahrener Trader",
        "description": "Du hast Trading-Erfahrung und möchtest deine Ergebnisse optimieren.",
        "strengths": ["Technisches Verständnis", "Praktische Erfahrung"],
        "weaknesses": ["Feintuning fehlt", "Optimierungspotenzial"],
    },
    "fortgeschritten": {
        "levelLabel": "Fortgeschrittener Trader",
        "description": "Du bist bereits profitabel und willst skalieren.",
        "strengths": ["Konstante Profitabilität", "Solides Risikomanagement"],
        "weaknesses": ["Skalierung", "Diversifikation"],
    },
}


def option_answer(answers: Mapping[str, Any], key: str) -> Optional[str]:
    """The answer to a single-choice question, None unless it is an option id."""
    value = answers.get(key)
    return value if isinstance(value, str) else None


def calculate_score(answers: Mapping[str, Any]) -> int:
    score = EXPERIENCE_POINTS.get(option_answer(answers, "2"), 0)
    for key, answer, points in BONUS_POINTS:
        if option_answer(answers, key) == answer:
            score += points
    return score


def level_for_score(score: int) -> Level:
    for bound, level in LEVEL_THRESHOLDS:
        if score < bound:
            return level
    return TOP_LEVEL


def recommend(level: Level, budget: Optional[str]) -> Recommendation:
    """Plan recommendation for a level and the monthly budget answer."""
    if level == "einsteiger":
        return Recommendation(primary="free", secondary="academy")
    if level == "fortgeschrittener_einsteiger":
        return Recommendation(primary="academy")
    if level == "erfahren":
        if budget == "500_plus":
            return Recommendation(primary="elite", secondary="academy")
        return Recommendation(primary="academy", secondary="elite")
    return Recommendation(primary="elite")


def calculate_result(answers: Mapping[str, Any]) -> QuizResult:
    """
    Score a completed quiz.

    Args:
        answers: Answer per question id (as string keys, e.g. {"2": "months"})

    Returns:
        QuizResult with level, copy and plan recommendation
    """
    score = calculate_score(answers)
    level = level_for_score(score)
    return QuizResult(
        score=score,
        level=level,
        recommendation=recommend(level, option_answer(answers, "11")),
        **LEVEL_PROFILES[level],
    )
