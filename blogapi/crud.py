import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .auth import hash_password, verify_password
from .errors import DuplicateOrInvalid, InvalidCredentials, ValidationError, NotFound, Forbidden
from .models.users import User
from .models.posts import Post
from .schemas.posts import PostFields

logger = logging.getLogger('blogapi.crud')

RECENT_POSTS_LIMIT = 20
REQUIRED_POST_FIELDS = ('title', 'summary', 'content', 'cover')


# users
async def create_user(session: AsyncSession, username: str, password: str) -> User:
    user = User(username=username, hashed_password=hash_password(password))
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning({'msg': 'register_rejected', 'username': username})
        raise DuplicateOrInvalid(f'Username {username!r} is already taken')
    await session.refresh(user)
    return user


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    q = await session.execute(select(User).where(User.username == username))
    return q.scalars().first()


async def get_user_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    q = await session.execute(select(User).where(User.id == user_id))
    return q.scalars().first()


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User:
    user = await get_user_by_username(session, username)
    # same error either way so callers cannot tell which part was wrong
    if not user or not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    return user


# posts
def _check_required(values: dict):
    missing = [name for name in REQUIRED_POST_FIELDS if not values.get(name)]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


async def create_post(session: AsyncSession, fields: PostFields, cover: str, author_id: str) -> Post:
    values = {**fields.model_dump(), 'cover': cover}
    _check_required(values)
    if await get_user_by_id(session, author_id) is None:
        raise ValidationError('Author does not exist')
    post = Post(author_id=author_id, **values)
    session.add(post)
    await session.commit()
    return await get_post(session, post.id)


async def list_recent_posts(session: AsyncSession, limit: int = RECENT_POSTS_LIMIT):
    q = await session.execute(select(Post).order_by(Post.created_at.desc()).limit(limit))
    return q.scalars().all()


async def get_post(session: AsyncSession, post_id: str) -> Optional[Post]:
    q = await session.execute(
        select(Post)
        .options(selectinload(Post.author), selectinload(Post.liked_by))
        .where(Post.id == post_id)
        .execution_options(populate_existing=True)
    )
    return q.scalars().first()


async def update_post(session: AsyncSession, post_id: str, fields: PostFields, cover: Optional[str], caller_id: str) -> Post:
    post = await get_post(session, post_id)
    if not post:
        raise NotFound('Post not found')
    if post.author_id != caller_id:
        raise Forbidden()
    # no partial updates: text fields are always overwritten
    post.title = fields.title
    post.summary = fields.summary
    post.content = fields.content
    if cover:
        post.cover = cover
    await session.commit()
    return await get_post(session, post.id)
