"""
The smart-trading video funnel.

Branching questions route by option index through nextNodes. The edges
mirror those routes and carry the linear parts of the funnel.
"""

from typing import Dict, List, Optional

from academy.funnel.graph import FunnelGraph
from academy.funnel.models import FunnelEdge, FunnelNode, FunnelNodeData

VIDEO_BASE = "https://rqjwroreqihyqyktucvj.supabase.co/storage/v1/object/public/videos/videos"

LEAD_FIELD_LABELS = {
    "firstName": "Vorname",
    "lastName": "Nachname",
    "email": "E-Mail",
    "phone": "Telefon",
    "age": "Alter",
}
LEAD_REQUIRED_FIELDS = ("firstName", "email")


def _video(
    node_id: str,
    name: str,
    description: str,
    delay: float,
    answers: Optional[List[str]] = None,
    routes: Optional[List[str]] = None,
    answer_type: Optional[str] = None,
    overlay: str = "",
    button_text: str = "Weiter",
    video_url: str = "",
    **extra,
) -> FunnelNode:
    if answer_type is None:
        answer_type = "multipleChoice" if answers else "button"
    next_nodes: Dict[str, str] = {str(index): target for index, target in enumerate(routes or [])}
    return FunnelNode(
        id=node_id,
        type="video",
        data=FunnelNodeData(
            name=name,
            description=description,
            videoUrl=video_url,
            overlayText=overlay,
            answerType=answer_type,
            answers=answers or [],
            buttonText=button_text,
            delaySeconds=delay,
            nextNodes=next_nodes,
            **extra,
        ),
    )


NODES: List[FunnelNode] = [
    FunnelNode(id="start", type="start", data=FunnelNodeData(label="Start")),
    _video(
        "v1-begruessung", "V1: Begrüßung", "Hey ich bin Saif - Mehr Info? Ja/Nein", 7,
        answers=["Saif kennenlernen", "Überspringen"],
        routes=["v2a-story", "v2b-direkt"],
        overlay="Willst du erstmal mehr über mich wissen? Oder sollen wir direkt zum Trading-Part?",
        video_url=f"{VIDEO_BASE}/7c913196-f67a-416c-8272-8da3eba77fd2.mp4",
        mcLayout="vertical",
    ),
    _video(
        "v2a-story", "V2a: Saif Story",
        "Meine Geschichte - 10 Jahre Trading, 2 Jahre Katastrophe, dann der Durchbruch", 0,
        answer_type="text",
        video_url=f"{VIDEO_BASE}/8fd4dfcf-fd37-4359-a9c2-828c1d557ca0.mp4",
    ),
    _video(
        "v2b-direkt", "V2b: Direkt los", "Okay okay – da hats jemand eilig!", 15,
        video_url=f"{VIDEO_BASE}/59d33b35-a9bd-4710-9a3e-c66d33f8a559.mp4",
    ),
    _video("v3b-ueberleitung", "V3b: Überleitung Direkt", "Also, sag mir: Wo stehst du gerade?", 10),
    _video(
        "v4-level-frage", "V4: Level-Frage", "Anfänger oder schon dabei? Die große Weiche.", 20,
        answers=["🟢 Ich fang gerade erst an", "🟡 Ich trade schon, aber noch nicht profitabel"],
        routes=["a1-level", "f1-level"],
        overlay="Fängst du gerade erst an mit Trading? Oder tradest du schon?",
    ),
    # Beginner path
    _video("a1-level", "A1: Level auffangen", "Du fängst gerade erst an – perfekt. Das ist ein Vorteil.", 20),
    _video(
        "a2-motivation", "A2: Frage Motivation", "Was willst du mit Trading erreichen?", 15,
        answers=["Nebeneinkommen 500-2000€", "Finanzielle Freiheit", "Erstmal verstehen"],
        routes=["a3a-nebeneinkommen", "a3b-freiheit", "a3c-verstehen"],
        overlay="Was ist dein Ziel?",
    ),
    _video("a3a-nebeneinkommen", "A3a: Nebeneinkommen", "500-2000€ extra – solider Plan, realistisch, machbar.", 25),
    _video("a3b-freiheit", "A3b: Finanzielle Freiheit", "Großes Ziel. Respekt. Ist möglich – ich leb davon.", 25),
    _video(
        "a3c-verstehen", "A3c: Verstehen",
        "Bester Startpunkt überhaupt. Keine Gier, keine unrealistischen Erwartungen.", 25,
    ),
    _video(
        "a4-blockade", "A4: Frage Blockade", "Was hält dich aktuell zurück?", 15,
        answers=["Angst vor Verlusten", "Überforderung", "Keine Zeit", "Vertraue keinem Coach"],
        routes=["a5a-angst", "a5b-ueberforderung", "a5c-zeit", "a5d-vertrauen"],
        overlay="Was ist die Blockade?",
    ),
    _video("a5a-angst", "A5a: Angst", "Angst ist berechtigt. Du WIRST verlieren – aber kontrolliert.", 35),
    _video(
        "a5b-ueberforderung", "A5b: Überforderung",
        "10 Mio YouTube Videos die sich widersprechen. Du brauchst EINEN Pfad.", 35,
    ),
    _video("a5c-zeit", "A5c: Zeit", "Swing Trading: 30 Min am Tag reichen. Morgens oder abends Charts checken.", 35),
    _video(
        "a5d-vertrauen", "A5d: Vertrauen",
        "Gut so. Trading-Industrie voll mit Betrügern. Ich muss mir dein Vertrauen verdienen.", 35,
    ),
    _video(
        "a6-ressourcen", "A6: Frage Ressourcen", "Wie viel Zeit und Geld könntest du investieren?", 15,
        answers=[
            "Klein – wenig Zeit, wenig Geld",
            "Mittel – paar Stunden, bisschen Kapital",
            "All-in – ich bin ready",
        ],
        routes=["a7a-klein", "a7b-mittel", "a7c-allin"],
        overlay="Klein starten, mittel, oder all-in?",
    ),
    _video("a7a-klein", "A7a: Klein", "Absolut okay. Erstmal Demo, kostet nichts. 30 Min am Tag reichen.", 25),
    _video(
        "a7b-mittel", "A7b: Mittel",
        "Perfekte Ausgangslage. Genug zum Lernen, nicht genug um alles zu verlieren.", 25,
    ),
    _video("a7c-allin", "A7c: All-in", "Liebe die Energie. ABER: Auch mit viel Ressourcen – langsam aufbauen.", 25),
    _video(
        "a8-loesung", "A8: Lösung", "Zusammenfassung: Grundlagen, simple Strategie, Demo-zu-Live Plan.", 40,
        button_text="Zeig mir die Lösung",
    ),
    _video(
        "a9-produkt", "A9: Produkt", "Starter Programm + kostenloser 5-Tage E-Mail-Kurs", 45,
        answers=["Zeig mir das Starter-Programm", "Erstmal kostenloser E-Mail-Kurs", "Ich hab noch Fragen"],
        button_text="Auswählen",
    ),
    # Trader path
    _video("f1-level", "F1: Level auffangen", "Du tradest schon, bist aber noch nicht profitabel. Die härteste Phase.", 25),
    _video(
        "f2-situation", "F2: Frage Situation", "Wie siehts bei dir gerade aus?", 15,
        answers=["Ich verliere mehr als ich gewinne", "Break-Even – mal plus, mal minus", "Komplett inkonsistent"],
        routes=["f3a-verlust", "f3b-breakeven", "f3c-inkonsistent"],
        overlay="Verlierst du, Break-Even, oder random?",
    ),
    _video("f3a-verlust", "F3a: Verlust", "Hart aber gut – es gibt ein KLARES Problem das wir finden können.", 30),
    _video("f3b-breakeven", "F3b: Break-Even", "Du bist besser als 80% der Trader. Oft nur ein kleiner Shift nötig.", 30),
    _video(
        "f3c-inkonsistent", "F3c: Inkonsistent",
        "Keine klare Strategie oder du hältst dich nicht dran. Beides lösbar.", 30,
    ),
    _video(
        "f4-problem", "F4: Frage Problem", "Was ist dein größtes Problem?", 15,
        answers=[
            "Strategie – hab keine die funktioniert",
            "Emotionen – halt mich nicht an Regeln",
            "Risk Management – verlier zu viel",
            "Weiß ich nicht",
        ],
        routes=["f5a-strategie", "f5b-emotionen", "f5c-risk", "f5d-weissnicht"],
        overlay="Strategie, Emotionen, oder Risk Management?",
    ),
    _video("f5a-strategie", "F5a: Strategie", "Du springst von System zu System. Du brauchst EIN System.", 35),
    _video("f5b-emotionen", "F5b: Emotionen", "Das HÄRTESTE Problem. Du brauchst Accountability.", 35),
    _video("f5c-risk", "F5c: Risk Management", "Der EINFACHSTE Fix. Klare Regeln, konsequent durchziehen.", 35),
    _video("f5d-weissnicht", "F5d: Weiß nicht", "Blinder Fleck. Mit Blick von außen oft in 5 Min klar.", 35),
    _video(
        "f6-ziel", "F6: Frage Ziel", "Was ist dein Ziel für die nächsten 12 Monate?", 15,
        answers=["Endlich profitabel werden", "Prop-Firm Challenge bestehen", "Trading zum Hauptjob machen"],
        routes=["f7a-profitabel", "f7b-propfirm", "f7c-vollzeit"],
        overlay="Profitabel, Prop-Firm, oder Vollzeit?",
    ),
    _video("f7a-profitabel", "F7a: Profitabel", "Der Klassiker. Komplett erreichbar mit Strategie und Disziplin.", 25),
    _video("f7b-propfirm", "F7b: Prop-Firm", "Smarter Move. ABER: Challenges sind designed damit du scheiterst.", 25),
    _video("f7c-vollzeit", "F7c: Vollzeit", "Großer Schritt. Mind. 12 Monate profitabel + 6 Monate Rücklagen.", 25),
    _video(
        "f8-loesung", "F8: Lösung", "Du brauchst: EIN System, Feedback, Accountability.", 40,
        button_text="Zeig mir die Lösung",
    ),
    _video(
        "f9-produkt", "F9: Produkt", "8-Wochen Coaching + kostenloser Live-Workshop", 50,
        answers=["Zeig mir das Coaching", "Zum kostenlosen Workshop", "Ich will erstmal reden"],
        button_text="Auswählen",
    ),
    _video(
        "abschluss", "Abschluss", "Willkommen bei Smart Trading. Check deine Mails. DMs sind offen.", 35,
        overlay="Schon profitabel und willst aufs nächste Level? Schreib mir direkt.",
        button_text="Fertig ✅",
    ),
    FunnelNode(
        id="lead-capture",
        type="leadCapture",
        data=FunnelNodeData(
            label="Lead Capture",
            title="Deine Trading-Analyse 📊",
            fields=["firstName", "lastName", "email", "phone"],
            optInText="Ich möchte weitere Informationen erhalten",
            description="Trag dich ein – ich schau mir deine Antworten persönlich an.",
        ),
    ),
    FunnelNode(
        id="end",
        type="end",
        data=FunnelNodeData(
            label="Ende",
            title="Check deine Mails! 📧",
            message="Wenn ich Potential sehe, melde ich mich persönlich. DMs sind offen – bis bald!",
            redirectUrl="",
        ),
    ),
]

_EDGE_PAIRS = [
    ("start", "v1"), ("v1", "v2a"), ("v1", "v2b"), ("v2a", "v4"), ("v2b", "v3b"), ("v3b", "v4"),
    ("v4", "a1"), ("a1", "a2"), ("a2", "a3a"), ("a2", "a3b"), ("a2", "a3c"),
    ("a3a", "a4"), ("a3b", "a4"), ("a3c", "a4"),
    ("a4", "a5a"), ("a4", "a5b"), ("a4", "a5c"), ("a4", "a5d"),
    ("a5a", "a6"), ("a5b", "a6"), ("a5c", "a6"), ("a5d", "a6"),
    ("a6", "a7a"), ("a6", "a7b"), ("a6", "a7c"),
    ("a7a", "a8"), ("a7b", "a8"), ("a7c", "a8"), ("a8", "a9"),
    ("v4", "f1"), ("f1", "f2"), ("f2", "f3a"), ("f2", "f3b"), ("f2", "f3c"),
    ("f3a", "f4"), ("f3b", "f4"), ("f3c", "f4"),
    ("f4", "f5a"), ("f4", "f5b"), ("f4", "f5c"), ("f4", "f5d"),
    ("f5a", "f6"), ("f5b", "f6"), ("f5c", "f6"), ("f5d", "f6"),
    ("f6", "f7a"), ("f6", "f7b"), ("f6", "f7c"),
    ("f7a", "f8"), ("f7b", "f8"), ("f7c", "f8"), ("f8", "f9"),
    ("a9", "abschluss"), ("f9", "abschluss"), ("abschluss", "lead"), ("lead", "end"),
]

_SHORT_IDS = {node.id.split("-")[0]: node.id for node in NODES}

EDGES: List[FunnelEdge] = [
    FunnelEdge(id=f"e-{source}-{target}", source=_SHORT_IDS[source], target=_SHORT_IDS[target])
    for source, target in _EDGE_PAIRS
]

# Sequential fallback for nodes without routes or edges
NODE_ORDER = [
    "v2a-story", "v1-begruessung", "v2b-direkt", "v3b-ueberleitung",
    "v4-level-frage", "a1-level", "f1-level", "a2-motivation", "a3a-nebeneinkommen",
    "f2-situation", "a3b-freiheit", "a3c-verstehen", "f3a-verlust", "f3b-breakeven",
    "f3c-inkonsistent", "a4-blockade", "f4-problem", "a5a-angst", "a5b-ueberforderung",
    "a5c-zeit", "a5d-vertrauen", "f5a-strategie", "f5b-emotionen", "f5c-risk",
    "f5d-weissnicht", "a6-ressourcen", "f6-ziel", "a7a-klein", "a7b-mittel",
    "a7c-allin", "f7a-profitabel", "f7b-propfirm", "f7c-vollzeit", "a8-loesung",
    "f8-loesung", "a9-produkt", "f9-produkt", "abschluss", "lead-capture", "end",
]

SMART_TRADING_FUNNEL = FunnelGraph("smart-trading-v6", NODES, EDGES, NODE_ORDER)
