"""Startup liveness probe for the remote model. Single attempt, no retry."""
import logging

from xray_analyst.constants import (
    MSG_CONNECTIVITY_FAILED,
    MSG_PROBE_EMPTY,
    MSG_PROBE_FAILED,
    MSG_PROBE_OK,
    PROBE_PROMPT,
)
from xray_analyst.errors import ConnectivityError
from xray_analyst.request import TextPart
from xray_analyst.vision.client import ModelClient

logger = logging.getLogger(__name__)


async def check_connectivity(model: ModelClient) -> bool:
    try:
        response = await model.generate([TextPart(PROBE_PROMPT)])
    except Exception as exc:
        logger.exception(MSG_PROBE_FAILED)
        raise ConnectivityError(MSG_CONNECTIVITY_FAILED) from exc
    match response:
        case None:
            logger.warning(MSG_PROBE_EMPTY)
            return False
        case _:
            logger.info(MSG_PROBE_OK)
            return True
