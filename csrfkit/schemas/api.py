from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    text: str = Field(min_length=1, max_length=500)


class TokenOut(BaseModel):
    token: str | None
    header_name: str
    form_field_name: str
