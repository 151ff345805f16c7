from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from learnhub.models.enums import UserRole
from learnhub.schemas.base_schema import CamelModel

# Schema for data received when a user registers
class UserRegister(CamelModel):
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = Field(UserRole.STUDENT, description="student, educator or admin")
    email: Optional[EmailStr] = None
    referral_code: Optional[str] = Field(None, max_length=64, description="Referral code of the user who invited this one")

class UserLogin(CamelModel):
    username: str
    password: str

# Schema for creating a user in our database after the password has been hashed
class UserCreateInternal(CamelModel):
    username: str
    password_hash: str
    role: UserRole = UserRole.STUDENT
    email: Optional[str] = None
    referred_by: Optional[str] = None

# Schema for displaying user information (sending data back to client)
class UserDisplay(CamelModel):
    id: int
    username: str
    email: Optional[str] = None
    role: UserRole
    referral_code: str = Field(..., description="User's unique referral code")
    referred_by: Optional[str] = Field(None, description="Referral code used at sign-up")
    earnings: float = Field(..., description="Current spendable earnings balance")
    created_at: Optional[datetime] = None
