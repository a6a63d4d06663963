import uuid
from pydantic import BaseModel
from typing import Optional


class TokenData(BaseModel):
    user_id: uuid.UUID
    email: Optional[str] = None


# Identity attached to a request once its bearer token verified
AuthContext = TokenData
