"""Response envelope: {"success": true, "data": ...} or {"success": false, "error": "..."}."""
from typing import Any

from fastapi.responses import JSONResponse


def ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def fail(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})
