import logging
from typing import Union, Optional, Any
from flask import Flask, render_template, redirect, request, url_for, jsonify, current_app
from werkzeug.exceptions import HTTPException
from config import Config
from models import Post, PostNotFound, ValidationError, parse_timestamp
from store import PostStore
from content import ContentProcessor
import blog

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None) -> Flask:
    config = config or Config.from_env()
    app : Flask = Flask(__name__)
    app.secret_key = config.secret_key
    app.config['BLOG'] = config
    app.extensions['post_store'] = PostStore(config.posts_file)
    app.extensions['content_processor'] = ContentProcessor()

    app.add_template_filter(format_date)
    register_routes(app)
    register_error_handlers(app)

    @app.before_request
    def log_request() -> None:
        logger.info('%s %s', request.method, request.full_path.rstrip('?'))

    return app


def format_date(value: str) -> str:
    '''Render an ISO timestamp as e.g. "February 1, 2024".'''
    moment = parse_timestamp(value)
    return f'{moment:%B} {moment.day}, {moment.year}'


def store() -> PostStore:
    return current_app.extensions['post_store']


def settings() -> Config:
    return current_app.config['BLOG']


def submitted(name: str) -> Optional[str]:
    data = request.get_json(silent=True) if request.is_json else None
    source = data if isinstance(data, dict) else request.form
    value = source.get(name)
    return value if isinstance(value, str) else None


def register_routes(app: Flask) -> None:

    @app.route('/')
    def index() -> Union[str, Any]:
        posts : list[Post] = store().load()
        return render_template('home.html', title='Welcome to Modern Blog',
                               featured_posts=blog.featured(posts, settings().FEATURED_COUNT))

    @app.route('/posts')
    def posts() -> Union[str, Any]:
        page : int = request.args.get('page', 1, type=int)
        listing : blog.Page = blog.paginate(store().load(), page, settings().PAGE_SIZE)
        return render_template('posts.html', title='All Blog Posts', page=listing)

    @app.route('/post')
    def post() -> Union[str, Any]:
        post_id : Optional[int] = request.args.get('id', type=int)
        found : blog.Neighbours = blog.locate(store().load(), post_id)
        body : str = current_app.extensions['content_processor'].render(found.post.content)
        return render_template('post.html', title=found.post.title, post=found.post, body=body,
                               prev_post=found.previous, next_post=found.next)

    @app.route('/add-post', methods=['GET', 'POST'])
    def add_post() -> Union[str, Any]:
        if request.method == 'POST':
            post_store : PostStore = store()
            posts : list[Post] = post_store.load()
            new_post : Post = blog.create_post(
                posts,
                title=submitted('title'),
                content=submitted('content'),
                author=submitted('author'),
                excerpt=submitted('excerpt'),
            )
            post_store.save(posts)
            return redirect(url_for('post', id=new_post.id))

        return render_template('add_post.html', title='Add New Post')

    @app.route('/preview-post', methods=['POST'])
    def preview_post() -> Union[str, Any]:
        try:
            preview : str = current_app.extensions['content_processor'].render(submitted('content'))
        except Exception:
            logger.exception('Preview error')
            return jsonify(error='Error generating preview'), 500
        return jsonify(preview=preview)

    @app.route('/search')
    def search() -> Union[str, Any]:
        query : str = request.args.get('q', '')
        if not query:
            return redirect(url_for('index'))
        results : list[Post] = blog.search(store().load(), query)
        return render_template('search.html', title='Search Results', query=query, posts=results)


def register_error_handlers(app: Flask) -> None:

    def error_page(message: str, status: int) -> tuple[str, int]:
        return render_template('error.html', title='Error', error=message), status

    @app.errorhandler(ValidationError)
    def invalid(_error) -> Union[str, Any]:
        return error_page('All fields are required', 400)

    @app.errorhandler(PostNotFound)
    def post_not_found(_error) -> Union[str, Any]:
        return error_page('Post not found', 404)

    # A known path with the wrong method is just another unmatched route.
    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(_error) -> Union[str, Any]:
        return error_page('Page not found', 404)

    @app.errorhandler(Exception)
    def server_error(error) -> Union[str, Any]:
        if isinstance(error, HTTPException):
            return error_page(error.name, error.code or 500)
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        return error_page('Something went wrong!', 500)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    config : Config = Config.from_env()
    app : Flask = create_app(config)
    logger.info('Modern blog server running at http://localhost:%d', config.port)
    app.run(host=config.host, port=config.port)
