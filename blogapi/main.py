import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pythonjsonlogger import jsonlogger

from .auth import TokenService
from .config import Settings
from .errors import register_error_handlers
from .models import make_engine, make_sessionmaker, init_models
from .routes import router
from .uploads import UploadStorage

logger = logging.getLogger('blogapi')

# setup structured logging
handler = logging.StreamHandler()
handler.setFormatter(jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s'))


def setup_logging(level: str = 'INFO'):
    if handler not in logger.handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(title="Blog API", version="1.0.0")

    engine = make_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = make_sessionmaker(engine)
    app.state.tokens = TokenService.from_settings(settings)
    app.state.uploads = UploadStorage(settings.upload_dir)
    app.state.uploads.ensure_dir()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_urls,
        allow_credentials=True,
        allow_methods=['GET', 'POST', 'PUT', 'DELETE'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    register_error_handlers(app)
    app.include_router(router)
    app.mount('/uploads', StaticFiles(directory=settings.upload_dir), name='uploads')

    @app.get('/healthz')
    async def healthz():
        return {'status': 'ok'}

    @app.middleware('http')
    async def log_requests(request: Request, call_next):
        logger.info({'msg': 'request_start', 'method': request.method, 'path': request.url.path})
        response = await call_next(request)
        logger.info({'msg': 'request_end', 'status': response.status_code})
        return response

    @app.on_event("startup")
    async def startup():
        app.state.uploads.ensure_dir()
        await init_models(engine)
        logger.info({'msg': 'startup_complete', 'token_transport': settings.token_transport})

    @app.on_event("shutdown")
    async def shutdown():
        await engine.dispose()

    return app


def run():
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
