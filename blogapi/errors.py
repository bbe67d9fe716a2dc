from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class BlogError(Exception):
    status_code = 500
    message = 'Internal Server Error'

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidCredentials(BlogError):
    status_code = 400
    message = 'Wrong credentials'


class DuplicateOrInvalid(BlogError):
    status_code = 400
    message = 'Registration failed'


class ValidationError(BlogError):
    status_code = 400
    message = 'Invalid input'


class NoFileProvided(BlogError):
    status_code = 400
    message = 'File is required'


class NoToken(BlogError):
    status_code = 401
    message = 'No token provided'


class InvalidToken(BlogError):
    status_code = 403
    message = 'Invalid token'


class Forbidden(BlogError):
    status_code = 403
    message = 'You are not the author of this post'


class NotFound(BlogError):
    status_code = 404
    message = 'Not found'


class InternalError(BlogError):
    status_code = 500


async def blog_error_handler(request: Request, exc: BlogError):
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # bad input is a 400 here, not FastAPI's default 422
    fields = ['.'.join(str(p) for p in err.get('loc', ()) if p not in ('body', 'form')) for err in exc.errors()]
    fields = [f for f in fields if f]
    message = 'Invalid input'
    if fields:
        message = f"Invalid or missing field(s): {', '.join(fields)}"
    return JSONResponse(status_code=400, content={'detail': message})


def register_error_handlers(app):
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
