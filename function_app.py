# -*- coding: utf-8 -*-
"""Azure Functions entry point.

FastAPI 앱을 ASGI 함수 앱으로 감싼다. 인증은 플랫폼의 function key 에 맡긴다.
"""
import azure.functions as func

from mis_encryption_func.main import app as fastapi_app

app = func.AsgiFunctionApp(app=fastapi_app, http_auth_level=func.AuthLevel.FUNCTION)
