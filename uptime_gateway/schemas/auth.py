from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str


class MessageResponse(BaseModel):
    code: int
    message: str
