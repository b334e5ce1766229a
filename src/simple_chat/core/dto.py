from pydantic import BaseModel, constr

class UserDTO(BaseModel):
    id: int
    username: constr(min_length=1)
    password_hash: str

class RosterEntryDTO(BaseModel):
    id: int
    username: str

class MessageDTO(BaseModel):
    id: int
    from_user: int
    to_user: int
    content: str
    created_at: str
