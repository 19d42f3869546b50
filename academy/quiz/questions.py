"""
Catalogue of the 12 lead-quiz questions.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

QuestionType = Literal["single", "multi", "slider", "chart", "contact"]


class QuizOption(BaseModel):
    label: str
    value: str
    description: Optional[str] = None


class SliderConfig(BaseModel):
    min: int
    max: int
    step: int


class LeadQuizQuestion(BaseModel):
    """One step of the lead quiz."""
    id: int
    title: str
    subtitle: Optional[str] = None
    type: QuestionType
    options: List[QuizOption] = Field(default_factory=list)
    sliderConfig: Optional[SliderConfig] = None
    feedback: Optional[Dict[str, str]] = None

    @property
    def key(self) -> str:
        """Key of this question in an answers mapping."""
        return str(self.id)


def format_capital(value: int, maximum: int = 50000) -> str:
    """Slider label for the capital question, e.g. "€12.500" or "€50.000+"."""
    amount = f"{min(value, maximum):,}".replace(",", ".")
    if value >= maximum:
        return f"€{amount}+"
    return f"€{amount}"


def _options(*pairs) -> List[QuizOption]:
    return [QuizOption(label=label, value=value) for label, value in pairs]


QUIZ_QUESTIONS: List[LeadQuizQuestion] = [
    LeadQuizQuestion(
        id=1,
        title="Was ist dein Hauptziel mit Trading?",
        type="single",
        options=_options(
            ("Nebeneinkommen aufbauen", "side_income"),
            ("Haupteinkommen langfristig ersetzen", "main_income"),
            ("Vermögen aufbauen", "wealth"),
            ("Einfach lernen und verstehen", "learn"),
        ),
    ),
    LeadQuizQuestion(
        id=2,
        title="Wo stehst du gerade?",
        type="single",
        options=_options(
            ("Noch nie getradet / nur Demo", "never"),
            ("Trade seit einigen Monaten mit echtem Geld", "months"),
            ("Trade seit über einem Jahr", "year_plus"),
            ("Bereits konstant profitabel", "profitable"),
        ),
    ),
    LeadQuizQuestion(
        id=3,
        title="Wie viel Zeit kannst du pro Woche investieren?",
        type="single",
        options=_options(
            ("1-5 Stunden", "1-5"),
            ("5-15 Stunden", "5-15"),
            ("15+ Stunden", "15+"),
        ),
    ),
    LeadQuizQuestion(
        id=4,
        title="Mit welchem Kapital planst du zu traden?",
        type="slider",
        sliderConfig=SliderConfig(min=500, max=50000, step=500),
    ),
    LeadQuizQuestion(
        id=5,
        title="Was siehst du in diesem Chart?",
        subtitle="Preis an einer klaren Support-Zone mit bullisher Candle-Formation",
        type="chart",
        options=_options(
            ("Möglicher Long-Einstieg am Support", "correct"),
            ("Weiter fallend, Short-Setup", "wrong_short"),
            ("Kein klares Setup erkennbar", "no_setup"),
            ("Bin mir nicht sicher", "unsure"),
        ),
        feedback={
            "correct": "Richtig! Du erkennst Support-Zonen.",
            "wrong_short": "Die Candle-Formation deutet eher auf Long hin.",
            "no_setup": "Es gibt hier tatsächlich ein Setup, du wirst lernen, es zu sehen.",
            "unsure": "Kein Problem, genau das lernst du bei uns.",
        },
    ),
    LeadQuizQuestion(
        id=6,
        title="Du bist 2% im Minus, dein Stop liegt bei -3%. Was machst du?",
        type="single",
        options=_options(
            ("Stop halten wie geplant", "hold_stop"),
            ("Stop anpassen, vielleicht dreht's noch", "adjust_stop"),
            ("Position vergrößern (nachkaufen)", "average_down"),
            ("Früher schließen aus Angst", "close_early"),
            ("Ich trade meistens ohne Stop", "no_stop"),
        ),
    ),
    LeadQuizQuestion(
        id=7,
        title=(
            "Du bist 3% im Plus, dein Take-Profit liegt bei 5%. "
            "Der Markt zeigt erste Schwäche. Was machst du?"
        ),
        type="single",
        options=_options(
            ("Plan halten, TP bei 5%", "hold_plan"),
            ("Gewinne sichern, Position schließen", "take_profit_early"),
            ("Stop nachziehen auf Break-Even", "trailing_stop"),
            ("Kommt drauf an (kein fester Plan)", "no_plan"),
        ),
    ),
    LeadQuizQuestion(
        id=8,
        title="Was beschreibt dich am besten?",
        type="single",
        options=_options(
            ("Mir fehlt eine klare Strategie", "no_strategy"),
            ("Ich weiß was zu tun ist, setze es aber nicht um", "no_execution"),
            ("Ich trade zu emotional", "emotional"),
            ("Ich bin noch ganz am Anfang", "beginner"),
            ("Ich bin schon gut, will aber besser werden", "advanced"),
        ),
    ),
    LeadQuizQuestion(
        id=9,
        title="Was hast du bisher genutzt?",
        subtitle="Mehrfachauswahl möglich",
        type="multi",
        options=_options(
            ("YouTube / Kostenlose Inhalte", "youtube"),
            ("Bücher", "books"),
            ("Online-Kurse", "courses"),
            ("Signalgruppen / Copy-Trading", "signals"),
            ("Selbst ausprobiert", "self_taught"),
            ("Noch nichts davon", "nothing"),
        ),
    ),
    LeadQuizQuestion(
        id=10,
        title="Wie lernst du am besten?",
        type="single",
        options=_options(
            ("Selbstständig durch Videos/Kurse", "video"),
            ("Interaktive Live-Sessions", "live"),
            ("Persönliches 1:1 Mentoring", "mentoring"),
            ("Learning by Doing mit Feedback", "learning_by_doing"),
        ),
    ),
    LeadQuizQuestion(
        id=11,
        title="Was wärst du bereit monatlich zu investieren, wenn du weißt, dass es funktioniert?",
        type="single",
        options=_options(
            ("Erstmal kostenlos testen", "free"),
            ("Bis €100/Monat", "up_to_100"),
            ("€100-500/Monat", "100_500"),
            ("€500+/Monat", "500_plus"),
        ),
    ),
    LeadQuizQuestion(
        id=12,
        title="Wohin sollen wir dein Ergebnis senden?",
        type="contact",
    ),
]


def get_question(question_id: int) -> Optional[LeadQuizQuestion]:
    for question in QUIZ_QUESTIONS:
        if question.id == question_id:
            return question
    return None
