"""
Routing through the funnel graph.

A node picks its successor in this order:

1. ``nextNodes[routing_key]``, then ``nextNodes["default"]``
2. the first edge leaving the node
3. the node after it in the sequential order

The routing key is derived from the answer: the option index for multiple
choice, yes/no for yes-no questions, low/medium/high for ratings and
"default" for everything else.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

from academy.funnel.models import AnswerValue, FunnelEdge, FunnelNode

logger = logging.getLogger(__name__)

DEFAULT_ROUTE = "default"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _rating_value(answer: AnswerValue) -> Optional[float]:
    if isinstance(answer, bool):
        return float(answer)
    if isinstance(answer, (int, float)):
        return answer
    match = _LEADING_INT.match(str(answer))
    return int(match.group(1)) if match else None


def routing_key(answer: AnswerValue, answer_type: str) -> str:
    """Key under which a node's nextNodes is looked up for an answer."""
    if answer_type == "multipleChoice":
        return str(answer)
    if answer_type == "yesno":
        return "yes" if answer else "no"
    if answer_type == "rating":
        rating = _rating_value(answer)
        # unparseable ratings land in high
        if rating is not None and rating <= 2:
            return "low"
        if rating is not None and rating <= 4:
            return "medium"
        return "high"
    return DEFAULT_ROUTE


class FunnelGraph:
    """Nodes, edges and the sequential fallback order of one funnel."""

    def __init__(
        self,
        name: str,
        nodes: Sequence[FunnelNode],
        edges: Sequence[FunnelEdge],
        order: Sequence[str] = (),
    ):
        self.name = name
        self.nodes: List[FunnelNode] = list(nodes)
        self.edges: List[FunnelEdge] = list(edges)
        self.order: List[str] = list(order)
        self._by_id: Dict[str, FunnelNode] = {node.id: node for node in self.nodes}

    def find_node(self, node_id: str) -> Optional[FunnelNode]:
        return self._by_id.get(node_id)

    @property
    def start_node(self) -> Optional[FunnelNode]:
        return next((node for node in self.nodes if node.type == "start"), None)

    def first_node(self) -> Optional[FunnelNode]:
        """The node shown once the viewer presses play."""
        start = self.start_node
        if start is None:
            return None
        return self.next_node(start.id)

    def next_node(self, node_id: str, key: str = DEFAULT_ROUTE) -> Optional[FunnelNode]:
        """
        Successor of a node for a routing key.

        Returns None for unknown nodes and at the end of the funnel. A
        nextNodes or edge target that does not exist also ends the walk
        rather than falling through to the next tier.
        """
        node = self.find_node(node_id)
        if node is None:
            return None

        next_nodes = node.data.nextNodes
        if next_nodes:
            if next_nodes.get(key):
                return self.find_node(next_nodes[key])
            if key != DEFAULT_ROUTE and next_nodes.get(DEFAULT_ROUTE):
                return self.find_node(next_nodes[DEFAULT_ROUTE])

        edge = next((edge for edge in self.edges if edge.source == node_id), None)
        if edge is not None:
            return self.find_node(edge.target)

        if node_id in self.order:
            index = self.order.index(node_id)
            if index < len(self.order) - 1:
                return self.find_node(self.order[index + 1])

        return None

    def route(self, node_id: str, answer: AnswerValue, answer_type: str) -> Optional[FunnelNode]:
        key = routing_key(answer, answer_type)
        target = self.next_node(node_id, key)
        logger.debug(f"Funnel {self.name}: {node_id} [{key}] -> {target.id if target else None}")
        return target
