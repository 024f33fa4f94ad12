import sentry_sdk

from app.core.config import settings


def configure_error_monitoring() -> bool:
    """Start Sentry when a DSN is configured; returns whether it was started."""
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    return True
