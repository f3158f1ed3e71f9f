from pydantic import BaseModel, StrictStr


class CodeRequest(BaseModel):
    code: StrictStr


class CodeResponse(BaseModel):
    namespace: str
    id: str
    code: str
    hash: str
