import math, logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from models import Post, PostNotFound, ValidationError
from content import sanitize_text

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE : int = 200
EXCERPT_LENGTH : int = 150


@dataclass
class Page:
    items : list[Post]
    current_page : int
    total_pages : int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


@dataclass
class Neighbours:
    post : Post
    previous : Optional[Post]
    next : Optional[Post]


def sort_by_date(posts: list[Post]) -> list[Post]:
    '''Newest first; posts with equal timestamps keep their stored order.'''
    return sorted(posts, key=lambda p: p.created, reverse=True)


def featured(posts: list[Post], count: int = 3) -> list[Post]:
    return sort_by_date(posts)[:count]


def paginate(posts: list[Post], page, page_size: int = 6) -> Page:
    '''Slice one page out of the date-sorted posts.

    A page below 1 or one that isn't a number falls back to 1. A page past
    the last one is returned empty rather than clamped.
    '''
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    if page < 1:
        page = 1

    ordered : list[Post] = sort_by_date(posts)
    total_pages : int = math.ceil(len(ordered) / page_size)
    offset : int = (page - 1) * page_size
    return Page(items=ordered[offset:offset + page_size], current_page=page, total_pages=total_pages)


def locate(posts: list[Post], post_id: Optional[int]) -> Neighbours:
    ordered : list[Post] = sort_by_date(posts)
    for index, post in enumerate(ordered):
        if post.id == post_id:
            break
    else:
        raise PostNotFound(post_id)

    # previous is the older post, next the newer one
    previous : Optional[Post] = ordered[index + 1] if index < len(ordered) - 1 else None
    newer : Optional[Post] = ordered[index - 1] if index > 0 else None
    return Neighbours(post=post, previous=previous, next=newer)


def search(posts: list[Post], query: Optional[str]) -> list[Post]:
    term : str = (query or '').lower()
    if not term:
        return []
    matches : list[Post] = [
        post for post in posts
        if term in post.title.lower() or term in post.content.lower() or term in post.author.lower()
    ]
    return sort_by_date(matches)


def reading_time(content: str) -> int:
    return math.ceil(len(content.split()) / WORDS_PER_MINUTE)


def make_excerpt(content: str) -> str:
    return content[:EXCERPT_LENGTH] + '...'


def create_post(posts: list[Post], title: Optional[str], content: Optional[str], author: Optional[str],
                excerpt: Optional[str] = None, now: Optional[datetime] = None) -> Post:
    '''Validate a submission, build the new Post and append it to ``posts``.

    The caller is responsible for saving the collection afterwards.
    '''
    title = sanitize_text(title)
    author = sanitize_text(author)
    if not title or not author or not (content and content.strip()):
        raise ValidationError('All fields are required')

    now = now or datetime.now(timezone.utc)
    post : Post = Post(
        id=max((p.id for p in posts), default=0) + 1,
        title=title,
        content=content,
        excerpt=sanitize_text(excerpt or make_excerpt(content)),
        author=author,
        created_at=now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
        reading_time=reading_time(content),
    )
    posts.append(post)
    logger.info('Created post %d "%s"', post.id, post.title)
    return post
