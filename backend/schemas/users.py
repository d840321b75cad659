# backend/schemas/users.py
from pydantic import BaseModel, EmailStr, constr

# helper types
PersonName = constr(strip_whitespace=True, min_length=1, max_length=255)
Password = constr(min_length=6, max_length=128)
LoginPassword = constr(min_length=1, max_length=128)

# ---------- Schemas ----------

class RegisterPayload(BaseModel):
    name: PersonName
    email: EmailStr
    password: Password

class UserOut(BaseModel):
    id: int
    name: str
    email: str

class LoginPayload(BaseModel):
    email: EmailStr
    password: LoginPassword

class LoginResponse(BaseModel):
    token: str
    user: UserOut

class MeResponse(BaseModel):
    userId: int
