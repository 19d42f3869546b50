"""
Static site content served to the front end.

Navigation, footer, plans and the 5-day challenge programme. Copy lives
here so every page reads it from one place.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class Link(BaseModel):
    label: str
    href: str


class PlanFeature(BaseModel):
    text: str
    included: bool = True


class PricingTier(BaseModel):
    """A subscription plan as shown on the pricing page."""
    id: str
    name: str
    price: str
    period: str = ""
    description: str
    features: List[PlanFeature]
    cta: str
    popular: bool = False


class ComparisonRow(BaseModel):
    feature: str
    starter: str
    academy: str
    elite: str


class ChallengeDayContent(BaseModel):
    intro: str
    bulletPoints: List[str]
    conclusion: str
    ctaText: Optional[str] = None
    ctaLink: Optional[str] = None


class ChallengeDay(BaseModel):
    """One day of the 5-day trader challenge."""
    day: int
    title: str
    videoTitle: str
    description: str
    content: ChallengeDayContent
    videoUrl: Optional[str] = None
    duration: str


# =============================================================================
# Navigation
# =============================================================================

NAV_LINKS: List[Link] = [
    Link(label="Über uns", href="/about"),
    Link(label="Programme", href="/academy"),
    Link(label="Erfolge", href="/success"),
    Link(label="Trading Bot", href="/bot"),
    Link(label="Kontakt", href="/contact"),
]

NAV_ACTIONS: List[Link] = [
    Link(label="Login", href="/login"),
    Link(label="Kostenlos starten", href="/quiz"),
]

FOOTER_LINKS: Dict[str, List[Link]] = {
    "product": [
        Link(label="Academy", href="/academy"),
        Link(label="Elite Mentoring", href="/elite"),
        Link(label="Trading Bot", href="/bot"),
        Link(label="Erfolge", href="/success"),
    ],
    "company": [
        Link(label="Über uns", href="/about"),
        Link(label="Kontakt", href="/contact"),
        Link(label="Blog", href="/blog"),
        Link(label="FAQ", href="/faq"),
    ],
    "legal": [
        Link(label="Impressum", href="/impressum"),
        Link(label="Datenschutz", href="/datenschutz"),
        Link(label="AGB", href="/agb"),
    ],
}

SOCIAL_LINKS: List[Link] = [
    Link(label="Instagram", href="https://instagram.com/smarttrading"),
    Link(label="YouTube", href="https://youtube.com/smarttrading"),
    Link(label="Telegram", href="https://t.me/smarttrading"),
]

# =============================================================================
# Plans
# =============================================================================

PRICING_TIERS: List[PricingTier] = [
    PricingTier(
        id="starter",
        name="Starter",
        price="0",
        description="Perfekt zum Einstieg ins Trading",
        features=[
            PlanFeature(text="7 Basis-Video-Kurse"),
            PlanFeature(text="Telegram Bot (10 Anfragen/Tag)"),
            PlanFeature(text="Community (nur lesen)"),
            PlanFeature(text="Trading Grundlagen"),
            PlanFeature(text="Premium Kurse", included=False),
            PlanFeature(text="Live Trading Calls", included=False),
            PlanFeature(text="1:1 Mentoring", included=False),
        ],
        cta="Kostenlos starten",
    ),
    PricingTier(
        id="academy",
        name="Academy",
        price="99",
        period="/Monat",
        description="Vollständiger Zugang zur Academy",
        features=[
            PlanFeature(text="50+ Premium Video-Kurse"),
            PlanFeature(text="Unbegrenzter Telegram Bot"),
            PlanFeature(text="Voller Community-Zugang"),
            PlanFeature(text="Wöchentliche Live Calls"),
            PlanFeature(text="Trading Livestreams"),
            PlanFeature(text="Exklusive Strategien"),
            PlanFeature(text="1:1 Mentoring", included=False),
        ],
        cta="Academy beitreten",
        popular=True,
    ),
    PricingTier(
        id="elite",
        name="Elite",
        price="1.950",
        description="1:1 Mentoring",
        features=[
            PlanFeature(text="Alles aus Academy"),
            PlanFeature(text="1:1 Mentoring (2x/Woche)"),
            PlanFeature(text="Direkte WhatsApp-Nummer"),
            PlanFeature(text="Office-Besuch (1x/Quartal)"),
            PlanFeature(text="Trading Bot Premium"),
            PlanFeature(text="Prioritäts-Support"),
            PlanFeature(text="Lifetime Zugang"),
        ],
        cta="Elite werden",
    ),
]

PLAN_COMPARISON: List[ComparisonRow] = [
    ComparisonRow(feature="Video-Kurse", starter="7 Basis", academy="50+ Premium", elite="Alle + Exklusiv"),
    ComparisonRow(feature="Telegram Bot", starter="10/Tag", academy="Unbegrenzt", elite="Unbegrenzt + Priority"),
    ComparisonRow(feature="Community", starter="Nur lesen", academy="Voller Zugang", elite="VIP Bereich"),
    ComparisonRow(feature="Live Calls", starter="-", academy="Wöchentlich", elite="2x Wöchentlich + 1:1"),
    ComparisonRow(feature="Mentoring", starter="-", academy="Gruppen Q&A", elite="1:1 Mentoring"),
    ComparisonRow(feature="Trading Bot", starter="-", academy="Standard", elite="Premium + Setup"),
    ComparisonRow(feature="Support", starter="Community", academy="Email + Chat", elite="WhatsApp direkt"),
]

# =============================================================================
# Rotating labels
# =============================================================================

# Level names cycled by the homepage quiz teaser
TEASER_LEVELS: List[str] = ["Einsteiger", "Fortgeschritten", "Erfahren", "Profi"]
TEASER_INTERVAL_SECONDS = 2.0
TESTIMONIAL_INTERVAL_SECONDS = 6.0

# =============================================================================
# 5-day challenge
# =============================================================================

_BOOK_CALL = "Buche dir hier einen Termin"

CHALLENGE_DAYS: List[ChallengeDay] = [
    ChallengeDay(
        day=1,
        title="Der Weg zum profitablen Trader",
        videoTitle="Was du wirklich brauchst, um profitabel zu traden",
        description=(
            "Am ersten Tag legst du das Fundament. Du lernst, wie du deinen Arbeitsplatz "
            "einrichtest, welche Tipps erfolgreiche Trader befolgen und wie du es dir zur "
            "Gewohnheit machst."
        ),
        content=ChallengeDayContent(
            intro=(
                "In diesem ersten Video steigen wir gemeinsam in die Trader Challenge ein "
                "und du bekommst direkt einen klaren Überblick:"
            ),
            bulletPoints=[
                "Wie der Alltag als profitabler Trader wirklich aussieht",
                "Warum du nicht täglich traden musst, um profitabel zu sein",
                "Mit wie wenig Startkapital du realistisch loslegen kannst",
                "Die 3 Voraussetzungen, die jeder profitable Trader erfüllen muss",
                "Und was du konkret tun kannst, um in wenigen Wochen erste Ergebnisse zu erzielen",
            ],
            conclusion=(
                "Du bekommst einen Einblick, wie andere es geschafft haben, vom "
                "Kfz-Mechatroniker bis zum Studenten."
            ),
            ctaText=_BOOK_CALL,
            ctaLink="#",
        ),
        duration="18 Min",
    ),
    ChallengeDay(
        day=2,
        title="Mit Risikomanagement zum Millionär",
        videoTitle="Live-Trading Einstieg",
        description=(
            "Am zweiten Tag steigen wir direkt in den Live-Trade ein. Du lernst am Chart, "
            "welche Indikatoren dir helfen, unnötige Verluste zu vermeiden."
        ),
        content=ChallengeDayContent(
            intro="Heute geht es um den Teil, der die meisten Trader scheitern lässt: Das Risikomanagement.",
            bulletPoints=[
                "Warum 90% der Trader scheitern und wie du zu den 10% gehörst",
                "Die goldene Regel des Risikomanagements",
                "Wie du mit nur 40% Gewinnquote profitabel tradest",
                "Konkrete Beispiele für Risk-Reward-Verhältnisse",
            ],
            conclusion=(
                "Es braucht keine Glaskugel oder Vorhersage. Es reicht ein System, das du "
                "verstehen, anwenden und wiederholen kannst."
            ),
            ctaText=_BOOK_CALL,
            ctaLink="#",
        ),
        duration="22 Min",
    ),
    ChallengeDay(
        day=3,
        title='Wie du "Gold im Chart" findest und erntest',
        videoTitle="Wie erkennst, wann der Markt dir Geld schenkt",
        description=(
            "Am dritten Tag lernst du Chartmuster erkennen und gehst in die Tiefe. "
            "Du erfährst alles über die besten Setups."
        ),
        content=ChallengeDayContent(
            intro=(
                "Im dritten Video zeig' ich dir, wie du echte Gelegenheiten im Markt erkennst "
                "und welche Setups du besser liegen lässt."
            ),
            bulletPoints=[
                "Wie du Trendphasen erkennst und systematisch nutzt",
                "Wie ein gutes Setup aussieht und woran du erkennst, wann der Markt bereit ist",
                "Warum ein Trading-Journal der wichtigste Spiegel deiner Entwicklung ist",
                "Und wie Profis mit Rückschlägen und Fehlern umgehen",
            ],
            conclusion=(
                "Ich zeig' dir LIVE am Chart, wie ein Trade entsteht. Du brauchst nicht "
                "viele Trades, nur die richtigen."
            ),
            ctaText=_BOOK_CALL,
            ctaLink="#",
        ),
        duration="25 Min",
    ),
    ChallengeDay(
        day=4,
        title="So mangelt es dir niemals an Geld (Kapital)",
        videoTitle="Kapital aufbauen, Denkfehler lösen und starten",
        description=(
            "Am vierten Tag dreht sich alles um Kapital und Prop Trading. Du lernst, wie "
            "du ohne eigenes Kapital startest."
        ),
        content=ChallengeDayContent(
            intro="Im vierten Video geht es um den Teil, an dem viele scheitern: das Kapital.",
            bulletPoints=[
                "Warum Firmen dir freiwillig Zugriff auf 6-stellige Konten gewähren",
                "Wie viel du realistischerweise selbst brauchst, um im Trading einzusteigen",
                "Was alle erfolgreichen Trader gemeinsam haben",
            ],
            conclusion=(
                "Außerdem sprechen wir über stark verbreitete Denkfehler rund um Geld."
            ),
            ctaText="Jetzt Termin sichern",
            ctaLink="#",
        ),
        duration="20 Min",
    ),
    ChallengeDay(
        day=5,
        title="Dein Trading-Plan",
        videoTitle="Abschluss der Challenge: Vom Wissen zur Umsetzung",
        description=(
            "Am fünften und letzten Tag erstellst du deinen persönlichen Trading-Plan. "
            "Mit allem, was du gelernt hast."
        ),
        content=ChallengeDayContent(
            intro=(
                "In den letzten Tagen hast du gelernt, wie profitables Trading wirklich "
                "funktioniert: mit System, klaren Regeln und kontrolliertem Risiko."
            ),
            bulletPoints=[
                "Trading ist ein simpler Skill, den du Schritt für Schritt erlernen kannst",
                "Schon mit einer Trefferquote von 40 % kannst du profitabel handeln",
                "Mit Prop Trading ist der Einstieg auch ohne Eigenkapital möglich",
                "Dein Skill entscheidet, nicht dein Kontostand",
                "Die besten Chancen entstehen, wenn du Einstiege gut erkennst und nicht dauernd handelst",
            ],
            conclusion=(
                "Jetzt kommt der entscheidende Punkt: die Umsetzung. Erst Handeln bringt Ergebnisse."
            ),
            ctaText="Jetzt persönliches Gespräch buchen",
            ctaLink="#",
        ),
        duration="28 Min",
    ),
]

SEVEN_STEPS_PLAN: List[str] = [
    "Trading View Account erstellen und Chartsetup einrichten.",
    "Einen Prop Trading Anbieter auswählen und Regeln verstehen.",
    "Demokonto erstellen und risikofrei testen.",
    "Handelsstrategie entwickeln und dokumentieren.",
    "Erste Live Trades mit kleiner Positionsgröße durchführen.",
    "Risikomanagement perfektionieren und Fehler analysieren.",
    "Ein solides Portfolio aufbauen und skalieren.",
]


def get_challenge_day(day: int) -> Optional[ChallengeDay]:
    for challenge_day in CHALLENGE_DAYS:
        if challenge_day.day == day:
            return challenge_day
    return None
