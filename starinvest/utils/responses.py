from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(data=None, message: str | None = None, success: bool = True, status_code: int = 200) -> JSONResponse:
    """Every endpoint answers ``{success, message?, data?}``."""
    content = {"success": success}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)
