import os, json, logging
from models import Post

logger = logging.getLogger(__name__)


class PostStore:
    '''Reads and rewrites the single JSON document holding every post.

    The document has the shape ``{"posts": [...]}``. Every save rewrites the
    whole file; there is no locking, so concurrent writers race and the last
    one wins.
    '''

    def __init__(self, path: str) -> None:
        self.path : str = path

    def load(self) -> list[Post]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data : dict = json.load(f)
        except FileNotFoundError:
            logger.info('No post store at %s, creating an empty one', self.path)
            self.save([])
            return []
        return [Post.model_validate(item) for item in data.get('posts', [])]

    def save(self, posts: list[Post]) -> None:
        directory : str = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'posts': [post.model_dump(mode='json', by_alias=True) for post in posts]}, f, indent=2, ensure_ascii=False)
