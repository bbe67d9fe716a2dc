import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.posts import PostOut, PostFields
from ..crud import create_post, list_recent_posts, get_post, update_post
from ..auth import get_current_user
from ..errors import BlogError, NoFileProvided, NotFound, InternalError
from ..models import get_session

logger = logging.getLogger('blogapi.routes.posts')

router = APIRouter()


def _fields(title: Optional[str], summary: Optional[str], content: Optional[str]) -> PostFields:
    return PostFields(title=title or '', summary=summary or '', content=content or '')


@router.post('', response_model=PostOut, status_code=201)
async def create(
    request: Request,
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    summary: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    if file is None or not file.filename:
        raise NoFileProvided()

    storage = request.app.state.uploads
    cover = await storage.store(file)
    try:
        post = await create_post(session, _fields(title, summary, content), cover, current_user['id'])
    except BlogError:
        storage.discard(cover)
        raise
    except SQLAlchemyError:
        logger.exception({'msg': 'post_create_failed', 'user_id': current_user['id']})
        storage.discard(cover)
        raise InternalError('Failed to create post')

    logger.info({'msg': 'post_created', 'post_id': post.id, 'user_id': current_user['id']})
    return post


@router.get('', response_model=List[PostOut])
async def list_recent(session: AsyncSession = Depends(get_session)):
    return await list_recent_posts(session)


@router.get('/{post_id}', response_model=PostOut)
async def get_one(post_id: str, session: AsyncSession = Depends(get_session)):
    post = await get_post(session, post_id)
    if not post:
        raise NotFound('Post not found')
    return post


async def _update(request, post_id, file, title, summary, content, current_user, session):
    storage = request.app.state.uploads
    cover = None
    if file is not None and file.filename:
        cover = await storage.store(file)
    try:
        post = await update_post(session, post_id, _fields(title, summary, content), cover, current_user['id'])
    except BlogError:
        storage.discard(cover)
        raise
    except SQLAlchemyError:
        logger.exception({'msg': 'post_update_failed', 'post_id': post_id})
        storage.discard(cover)
        raise InternalError('Failed to update post')

    logger.info({'msg': 'post_updated', 'post_id': post.id, 'new_cover': cover is not None})
    return post


@router.put('/{post_id}', response_model=PostOut)
async def update(
    post_id: str,
    request: Request,
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    summary: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    return await _update(request, post_id, file, title, summary, content, current_user, session)


@router.put('', response_model=PostOut)
async def update_by_form_id(
    request: Request,
    id: str = Form(...),
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    summary: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    return await _update(request, id, file, title, summary, content, current_user, session)
