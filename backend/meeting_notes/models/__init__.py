# Namespace for Pydantic models.
from .email import SendEmailRequest, SendEmailResponse
from .share import CreateShareRequest, CreateShareResponse, ShareEntry
from .summary import SummarizeRequest, SummarizeResponse

__all__ = [
    "CreateShareRequest",
    "CreateShareResponse",
    "SendEmailRequest",
    "SendEmailResponse",
    "ShareEntry",
    "SummarizeRequest",
    "SummarizeResponse",
]
