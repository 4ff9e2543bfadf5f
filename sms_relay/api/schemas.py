"""
API Schemas
===========
Request and response models of the submission endpoint.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from sms_relay.messaging import originator_error, recipient_error, message_error


class SubmissionRequest(BaseModel):
    """
    Message submission.

    Error texts are static: they are returned to the client and must
    never echo request values.
    """
    model_config = ConfigDict(populate_by_name=True)

    originator: str = Field(alias="Originator")
    recipient: StrictInt = Field(alias="Recipient")
    message: str = Field(alias="Message")

    @field_validator("originator")
    @classmethod
    def check_originator(cls, value: str) -> str:
        error = originator_error(value)
        if error:
            raise ValueError(error)
        return value

    @field_validator("recipient")
    @classmethod
    def check_recipient(cls, value: int) -> int:
        error = recipient_error(str(value))
        if error:
            raise ValueError(error)
        return value

    @field_validator("message")
    @classmethod
    def check_message(cls, value: str) -> str:
        error = message_error(value)
        if error:
            raise ValueError(error)
        return value

    @property
    def recipient_msisdn(self) -> str:
        return str(self.recipient)


class SubmissionAccepted(BaseModel):
    """Response for a queued submission."""
    status: str = "queued"
    segments: int
