from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Phone Number Verification Schemas
class SendCodeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")

class VerifyCodeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    code: Optional[str] = None

class SendCodeResponse(BaseModel):
    success: bool = True
    sid: str
    method: str
    phone: str
    message: Optional[str] = None

class VerifyCodeResponse(BaseModel):
    success: bool = True
    verified: bool = True
    method: str
    phone: str
    message: Optional[str] = None

class ErrorResponse(BaseModel):
    success: bool = False
    verified: Optional[bool] = None
    error: str
    timestamp: str
