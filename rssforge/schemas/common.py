from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
    version: str
    docs: str


class HealthResponse(BaseModel):
    ok: bool
