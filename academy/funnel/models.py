"""
Node and edge models of the branching video funnel.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

NodeType = Literal["start", "video", "leadCapture", "end"]
AnswerType = Literal["button", "multipleChoice", "yesno", "text", "email", "rating", "none"]
AnswerValue = Union[bool, int, float, str]


class FunnelNodeData(BaseModel):
    """
    What a node shows and how it is answered.

    Styling keys the player does not interpret (button sizes, layout hints)
    are kept as extra fields and handed to the client untouched.
    """

    model_config = ConfigDict(extra="allow")

    label: Optional[str] = None
    name: Optional[str] = None
    videoUrl: Optional[str] = None
    overlayText: Optional[str] = None
    description: Optional[str] = None
    answerType: Optional[AnswerType] = None
    answers: List[str] = Field(default_factory=list)
    buttonText: Optional[str] = None
    buttonColor: Optional[str] = None
    delaySeconds: Optional[float] = None
    delayBeforeButtons: Optional[float] = None
    yesText: Optional[str] = None
    noText: Optional[str] = None
    placeholder: Optional[str] = None
    nextNodes: Dict[str, str] = Field(default_factory=dict)
    # lead capture
    title: Optional[str] = None
    fields: List[str] = Field(default_factory=list)
    optInText: Optional[str] = None
    # end
    message: Optional[str] = None
    redirectUrl: Optional[str] = None


class FunnelNode(BaseModel):
    id: str
    type: NodeType
    data: FunnelNodeData = Field(default_factory=FunnelNodeData)

    @property
    def needs_interaction(self) -> bool:
        """
        Whether the viewer has to answer before moving on.

        Nodes without an interaction advance on their own when the video
        ends. Multiple choice only counts when there are answers to pick.
        """
        answer_type = self.data.answerType
        if answer_type in ("button", "yesno", "text", "email", "rating"):
            return True
        if answer_type == "multipleChoice":
            return len(self.data.answers) > 0
        return False

    @property
    def button_delay(self) -> float:
        """Seconds into the video before the answer buttons appear."""
        if self.data.delaySeconds is not None:
            return self.data.delaySeconds
        if self.data.delayBeforeButtons is not None:
            return self.data.delayBeforeButtons
        return 0

    def buttons_visible(self, current_time: float) -> bool:
        return self.needs_interaction and current_time >= self.button_delay


class FunnelEdge(BaseModel):
    id: str
    source: str
    target: str
    type: str = "custom"


class FunnelResponse(BaseModel):
    """One recorded answer."""
    nodeId: str
    answer: AnswerValue
    answerType: str
    timestamp: str
