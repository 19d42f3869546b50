"""
State of one viewer's walk through the funnel.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from academy.funnel.data import LEAD_REQUIRED_FIELDS, SMART_TRADING_FUNNEL
from academy.funnel.graph import FunnelGraph
from academy.funnel.models import AnswerValue, FunnelNode, FunnelResponse

logger = logging.getLogger(__name__)


def missing_lead_fields(lead: Mapping[str, str]) -> List[str]:
    """Required lead-form fields left empty."""
    return [field for field in LEAD_REQUIRED_FIELDS if not str(lead.get(field) or "").strip()]


class FunnelRun:
    """
    Walks a viewer through the video nodes.

    Nothing is shown until `start` (the play button). Answers are recorded
    with a timestamp and routed by their answer type; videos that need no
    interaction advance when they end.
    """

    def __init__(self, graph: FunnelGraph = SMART_TRADING_FUNNEL):
        self.graph = graph
        self.node: Optional[FunnelNode] = None
        self.responses: List[FunnelResponse] = []
        self.lead: Optional[Dict[str, str]] = None

    @property
    def started(self) -> bool:
        return self.node is not None

    @property
    def finished(self) -> bool:
        return self.node is not None and self.node.type == "end"

    def start(self) -> Optional[FunnelNode]:
        self.node = self.graph.first_node()
        return self.node

    def _go_to(self, target: Optional[FunnelNode]) -> Optional[FunnelNode]:
        # no successor keeps the viewer on the current node
        if target is not None:
            self.node = target
        return target

    def answer(self, value: AnswerValue, answer_type: str) -> Optional[FunnelNode]:
        """Record an answer on the current node and move to its successor."""
        if self.node is None:
            raise ValueError("Funnel not started")

        self.responses.append(FunnelResponse(
            nodeId=self.node.id,
            answer=value,
            answerType=answer_type,
            timestamp=datetime.now(timezone.utc).isoformat(),
        ))
        return self._go_to(self.graph.route(self.node.id, value, answer_type))

    def video_ended(self) -> Optional[FunnelNode]:
        """Auto-advance, unless the node is waiting for an answer."""
        if self.node is None or self.node.needs_interaction:
            return None
        return self._go_to(self.graph.next_node(self.node.id))

    def submit_lead(self, lead: Mapping[str, str]) -> Optional[FunnelNode]:
        """
        Store the lead form and continue.

        Raises:
            ValueError: Not on a lead-capture node, or required fields missing
        """
        if self.node is None or self.node.type != "leadCapture":
            raise ValueError("No lead form on the current node")
        missing = missing_lead_fields(lead)
        if missing:
            raise ValueError(f"Missing lead fields: {', '.join(missing)}")

        self.lead = dict(lead)
        logger.info(f"Funnel lead captured after {len(self.responses)} answers")
        return self._go_to(self.graph.next_node(self.node.id))
