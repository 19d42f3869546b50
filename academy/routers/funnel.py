"""
Video funnel API endpoints.

The client plays the videos; these routes hand out the graph and decide
where each answer leads.
"""

import logging

from fastapi import APIRouter, Query

from common.utils import BadRequestException, NotFoundException, success_response

from academy.funnel import LEAD_FIELD_LABELS, SMART_TRADING_FUNNEL, FunnelNode, routing_key
from academy.schemas.funnel import FunnelAnswerRequest, FunnelLeadRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/funnel", tags=["Funnel"])


def _node_view(node: FunnelNode) -> dict:
    return {
        **node.model_dump(mode="json"),
        "needsInteraction": node.needs_interaction,
        "buttonDelay": node.button_delay,
    }


def _get_node(node_id: str) -> FunnelNode:
    node = SMART_TRADING_FUNNEL.find_node(node_id)
    if node is None:
        raise NotFoundException("Funnel node not found", code="FUNNEL_NODE_NOT_FOUND")
    return node


@router.get("")
async def get_funnel():
    """The whole graph, with the node the play button leads to."""
    funnel = SMART_TRADING_FUNNEL
    first = funnel.first_node()
    return success_response({
        "name": funnel.name,
        "nodes": [_node_view(node) for node in funnel.nodes],
        "edges": funnel.edges,
        "order": funnel.order,
        "firstNodeId": first.id if first else None,
        "leadFieldLabels": LEAD_FIELD_LABELS,
    })


@router.get("/nodes/{node_id}")
async def get_funnel_node(node_id: str):
    return success_response(_node_view(_get_node(node_id)))


@router.get("/nodes/{node_id}/next")
async def get_next_node(node_id: str, key: str = Query("default", max_length=50)):
    """Successor for a routing key; null at the end of the funnel."""
    _get_node(node_id)
    target = SMART_TRADING_FUNNEL.next_node(node_id, key)
    return success_response({"next": _node_view(target) if target else None})


@router.post("/answer")
async def answer_node(body: FunnelAnswerRequest):
    _get_node(body.nodeId)
    target = SMART_TRADING_FUNNEL.route(body.nodeId, body.answer, body.answerType)
    return success_response({
        "routingKey": routing_key(body.answer, body.answerType),
        "next": _node_view(target) if target else None,
    })


@router.post("/lead")
async def capture_lead(body: FunnelLeadRequest):
    """
    Lead form at the end of the funnel.

    Returns:
        The closing node
    """
    node = _get_node(body.nodeId)
    if node.type != "leadCapture":
        raise BadRequestException("Node has no lead form", code="NOT_A_LEAD_NODE")

    logger.info(f"Funnel lead {body.email} (opt-in: {body.optIn}, {len(body.responses)} answers)")
    target = SMART_TRADING_FUNNEL.next_node(node.id)
    return success_response({"next": _node_view(target) if target else None})
