import os, secrets
from dataclasses import dataclass, field
from typing import ClassVar
from dotenv import load_dotenv

file_dir : str = os.path.dirname(os.path.realpath(__file__))
DEFAULT_POSTS_FILE : str = os.path.join(file_dir, 'data', 'posts.json')


@dataclass
class Config:
    '''Process-wide settings, built once at startup and handed to create_app.'''

    port : int = 3000
    host : str = '0.0.0.0'
    posts_file : str = DEFAULT_POSTS_FILE
    secret_key : str = field(default_factory=lambda: secrets.token_hex(16))

    PAGE_SIZE : ClassVar[int] = 6
    FEATURED_COUNT : ClassVar[int] = 3

    @classmethod
    def from_env(cls) -> 'Config':
        load_dotenv()
        return cls(
            port=int(os.getenv('PORT', '3000')),
            host=os.getenv('HOST', '0.0.0.0'),
            posts_file=os.getenv('POSTS_FILE', DEFAULT_POSTS_FILE),
            secret_key=os.getenv('SECRET_KEY') or secrets.token_hex(16),
        )
