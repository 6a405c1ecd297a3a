"""
Shared response schemas
"""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    message: str
