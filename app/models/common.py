from typing import Literal, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: Optional[str] = None
