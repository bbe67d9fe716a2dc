import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.users import RegisterIn, LoginIn, UserOut, LoginOut, ProfileOut
from ..crud import create_user, authenticate_user
from ..auth import get_current_user, TOKEN_COOKIE
from ..errors import InvalidCredentials
from ..models import get_session

logger = logging.getLogger('blogapi.routes.users')

router = APIRouter()


@router.post('/register', response_model=UserOut)
async def register(payload: RegisterIn, session: AsyncSession = Depends(get_session)):
    user = await create_user(session, payload.username, payload.password)
    logger.info({'msg': 'user_registered', 'user_id': user.id, 'username': user.username})
    return user


@router.post('/login', response_model=LoginOut, response_model_exclude_none=True)
async def login(
    payload: LoginIn,
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_session)
):
    try:
        user = await authenticate_user(session, payload.username, payload.password)
    except InvalidCredentials:
        logger.warning({'msg': 'login_rejected', 'username': payload.username})
        raise

    settings = request.app.state.settings
    token = request.app.state.tokens.issue({'username': user.username, 'id': user.id})
    logger.info({'msg': 'user_logged_in', 'user_id': user.id, 'transport': settings.token_transport})

    if settings.cookie_transport:
        response.set_cookie(
            TOKEN_COOKIE, token,
            httponly=True,
            secure=settings.cookie_secure,
            samesite='none' if settings.cookie_secure else 'lax',
        )
        return LoginOut(id=user.id, username=user.username)
    return LoginOut(id=user.id, username=user.username, token=token)


@router.get('/profile', response_model=ProfileOut)
async def profile(current_user: dict = Depends(get_current_user)):
    return current_user


@router.post('/logout')
async def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE)
    return 'ok'
