"""
Submission Routes
=================
POST /messages: validate, split and queue a message.
"""

from fastapi import APIRouter, Request

from sms_relay.delivery import Messenger
from sms_relay.exceptions import MessageTooLong, QueueClosed, QueueFull
from .errors import RelayErrors
from .schemas import SubmissionRequest, SubmissionAccepted

SMS_ENDPOINT = "/messages"


def create_messages_router() -> APIRouter:
    """
    Create the submission router.

    The Messenger is read from `app.state.messenger`, set up by the
    application lifespan.
    """
    router = APIRouter(tags=["Messages"])

    @router.post(SMS_ENDPOINT, status_code=202, response_model=SubmissionAccepted)
    async def submit_message(submission: SubmissionRequest, request: Request) -> SubmissionAccepted:
        """Queue a message; it is sent later at the gateway send rate."""
        messenger: Messenger = request.app.state.messenger

        try:
            segments = await messenger.send_text(
                submission.originator,
                submission.recipient_msisdn,
                submission.message,
            )
        except MessageTooLong as e:
            raise RelayErrors.message_too_long(str(e))
        except QueueFull as e:
            raise RelayErrors.queue_full(str(e))
        except QueueClosed as e:
            raise RelayErrors.shutting_down(str(e))

        return SubmissionAccepted(segments=len(segments))

    return router
