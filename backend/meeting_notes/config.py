"""Application-wide configuration loader.

Values are read once, at import time, from the process environment.  A
``.env`` file in the working directory is loaded first so local development
does not need exported variables.  There is no hot reload: restart the
process to pick up changes.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Settings helper that gracefully falls back to sane defaults.

    Every setting uses the idiom ``os.getenv(KEY) or DEFAULT`` so that an
    injected-but-empty variable (``SMTP_PORT=""``) is replaced by the default
    instead of overriding it with an unusable empty string.
    """

    HOST: str = os.getenv('HOST') or '0.0.0.0'
    PORT: int = int(os.getenv('PORT') or '3001')
    CORS_ORIGIN: str = os.getenv('CORS_ORIGIN') or '*'
    PUBLIC_BASE_URL: str = os.getenv('PUBLIC_BASE_URL') or f'http://localhost:{PORT}'
    APP_TITLE: str = os.getenv('APP_TITLE') or 'AI Meeting Notes'

    # Summarization provider (OpenAI-compatible chat completions API)
    OPENROUTER_API_KEY: str = os.getenv('OPENROUTER_API_KEY') or ''
    OPENROUTER_BASE_URL: str = os.getenv('OPENROUTER_BASE_URL') or 'https://openrouter.ai/api/v1'
    OPENROUTER_MODEL: str = os.getenv('OPENROUTER_MODEL') or 'deepseek/deepseek-r1:free'
    LLM_TIMEOUT_SECONDS: float = float(os.getenv('LLM_TIMEOUT_SECONDS') or '120')

    # Outbound mail
    SMTP_HOST: str = os.getenv('SMTP_HOST') or ''
    SMTP_PORT: int = int(os.getenv('SMTP_PORT') or '587')
    SMTP_USER: str = os.getenv('SMTP_USER') or ''
    SMTP_PASS: str = os.getenv('SMTP_PASS') or ''
    SMTP_USE_SSL: bool = _flag(os.getenv('SMTP_USE_SSL'))
    EMAIL_FROM: str = os.getenv('EMAIL_FROM') or os.getenv('EMAIL_USER') or SMTP_USER

    MAX_REQUEST_BYTES: int = int(os.getenv('MAX_REQUEST_BYTES') or str(4 * 1024 * 1024))

    LOG_DIR: str = os.getenv('LOG_DIR') or 'backend/logs'
    LOG_LEVEL: str = (os.getenv('LOG_LEVEL') or 'INFO').upper()

    @property
    def cors_origins(self) -> list[str]:
        """``CORS_ORIGIN`` as the list ``CORSMiddleware`` expects."""
        if self.CORS_ORIGIN.strip() == '*':
            return ['*']
        return [origin.strip() for origin in self.CORS_ORIGIN.split(',') if origin.strip()]

    def share_url(self, share_id: str) -> str:
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}/share/{share_id}"


settings = Settings()
