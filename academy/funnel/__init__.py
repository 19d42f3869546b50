"""
Branching video funnel.

Short videos with questions; the answers pick the path and the funnel ends
in a lead form.
"""

from academy.funnel.models import FunnelEdge, FunnelNode, FunnelNodeData, FunnelResponse
from academy.funnel.graph import DEFAULT_ROUTE, FunnelGraph, routing_key
from academy.funnel.data import LEAD_FIELD_LABELS, LEAD_REQUIRED_FIELDS, NODE_ORDER, SMART_TRADING_FUNNEL
from academy.funnel.flow import FunnelRun, missing_lead_fields

__all__ = [
    "FunnelEdge",
    "FunnelNode",
    "FunnelNodeData",
    "FunnelResponse",
    "DEFAULT_ROUTE",
    "FunnelGraph",
    "routing_key",
    "LEAD_FIELD_LABELS",
    "LEAD_REQUIRED_FIELDS",
    "NODE_ORDER",
    "SMART_TRADING_FUNNEL",
    "FunnelRun",
    "missing_lead_fields",
]
