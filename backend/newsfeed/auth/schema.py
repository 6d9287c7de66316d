from pydantic import Field

from ..models import CustomModel

class Credentials(CustomModel):
    username: str = Field(..., min_length=1, max_length=50, json_schema_extra={"example": "reader"})
    password: str = Field(..., min_length=1, json_schema_extra={"example": "strongpassword123"})
