"""E-mail delivery endpoint."""

from fastapi import APIRouter

from ..models.email import SendEmailRequest, SendEmailResponse
from ..services.mailer import send_email

router = APIRouter()


@router.post("/send-email", response_model=SendEmailResponse)
async def send_summary_email(body: SendEmailRequest) -> SendEmailResponse:
    message_id = await send_email(body.to, body.subject, body.content)
    return SendEmailResponse(ok=True, message_id=message_id)
