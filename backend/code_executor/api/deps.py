from typing import Annotated

from fastapi import Depends

from code_executor.core.memory import get_memory_backend
from code_executor.engines import CodeExecutor


def get_code_executor() -> CodeExecutor:
    return CodeExecutor(get_memory_backend())


ExecutorDep = Annotated[CodeExecutor, Depends(get_code_executor)]
