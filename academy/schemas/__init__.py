"""
Academy schemas.

Pydantic models for backend rows and request/response validation.
"""

from academy.schemas.records import *
from academy.schemas.auth import *
from academy.schemas.learning import *
from academy.schemas.community import *
from academy.schemas.profile import *
from academy.schemas.quiz import *
from academy.schemas.challenge import *
from academy.schemas.funnel import *
