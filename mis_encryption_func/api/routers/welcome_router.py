# _*_ coding: utf-8 _*_
import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Azure Functions! EncryptionWorks"

router = APIRouter(tags=["welcome"])


@router.api_route("/MIS_Encryption_Func", methods=["GET", "POST"], response_class=PlainTextResponse)
async def welcome() -> PlainTextResponse:
    logger.info("HTTP trigger function processed a request.")
    return PlainTextResponse(WELCOME_MESSAGE)
