# tamapet/validate.py
import logging

from fastapi import HTTPException, status
from init_data_py import InitData, errors

logger = logging.getLogger(__name__)


def caller_id(raw: str, bot_token: str, *, lifetime: int = 3600) -> str:
    """
    Identify the caller from Telegram Web-App initData.
    Raises HTTP 400 for malformed / absent data, 403 for forged or expired data.
    The returned user id is what pet ownership is checked against.
    """
    try:
        init = InitData.parse(raw)
    except errors.UnexpectedFormatError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="initData missing or malformed – open this page inside Telegram",
        )

    if init.user is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="initData carries no user",
        )

    if not init.validate(bot_token, lifetime=lifetime):
        logger.warning("rejected initData for user %s", init.user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="initData signature invalid or expired",
        )

    return str(init.user.id)
