from typing import Optional
from pydantic import BaseModel

# ✅ request
class LoginRequest(BaseModel):
    username: str
    password: str

# ✅ response
class LoginResponse(BaseModel):
    user_id: int
    username: str
    user_type: str
    token: str
    details: Optional[dict] = None           # linked student / teacher row
