from fastapi import APIRouter

from code_executor.api.routes import execute, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(execute.router)
