"""Pydantic request/response schemas for sb_gateway.

Only existence and type are checked: any string is a valid username or
password.
"""

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str
    password: str


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    balance: int
