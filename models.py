from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ValidationError(ValueError):
    '''A submitted post is missing a required field.'''


class PostNotFound(LookupError):
    pass


class Post(BaseModel):
    '''A blog entry as stored in the posts document.

    Field order is the on-disk key order; the two camelCase keys are aliases
    so records can be built by either name.
    '''

    model_config = ConfigDict(populate_by_name=True)

    id : int
    title : str
    content : str
    excerpt : str = ''
    author : str
    created_at : str = Field(alias='createdAt')
    reading_time : int = Field(default=1, alias='readingTime')

    @property
    def created(self) -> datetime:
        '''Creation time as an aware datetime; unparseable values sort as the oldest instant.'''
        return parse_timestamp(self.created_at)


def parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    try:
        parsed : datetime = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
