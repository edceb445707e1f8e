'''Markdown to sanitized HTML for post bodies, and plain-text cleaning for post fields.'''

from typing import Optional
import bleach
from bleach.sanitizer import Cleaner
import markdown

BASE_TAGS : frozenset[str] = frozenset([
    'address', 'article', 'aside', 'footer', 'header', 'hgroup', 'main', 'nav', 'section',
    'h4', 'h5', 'h6',
    'blockquote', 'dd', 'div', 'dl', 'dt', 'figcaption', 'figure', 'hr', 'li', 'ol', 'p', 'pre', 'ul',
    'a', 'abbr', 'b', 'bdi', 'bdo', 'br', 'cite', 'code', 'data', 'dfn', 'em', 'i', 'kbd', 'mark',
    'q', 's', 'samp', 'small', 'span', 'strong', 'sub', 'sup', 'time', 'u', 'var', 'wbr',
    'caption', 'col', 'colgroup', 'table', 'tbody', 'td', 'tfoot', 'th', 'thead', 'tr',
])
ALLOWED_TAGS : frozenset[str] = BASE_TAGS | {'img', 'h1', 'h2', 'h3'}
ALLOWED_ATTRIBUTES : dict[str, list[str]] = {
    'a': ['href', 'target', 'rel'],
    'img': ['src', 'alt', 'title'],
}
ALLOWED_PROTOCOLS : frozenset[str] = frozenset(['http', 'https', 'ftp', 'mailto', 'tel'])

MARKDOWN_EXTENSIONS : list[str] = ['extra', 'sane_lists', 'nl2br']


class MarkdownRenderer:
    def __init__(self, extensions: Optional[list[str]] = None) -> None:
        self.extensions : list[str] = list(extensions or MARKDOWN_EXTENSIONS)

    def render(self, text: str) -> str:
        return markdown.markdown(text, extensions=self.extensions, output_format='html')


class HtmlSanitizer:
    '''Allow-list sanitizer: anything not listed is stripped.'''

    def __init__(self, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, protocols=ALLOWED_PROTOCOLS) -> None:
        self._cleaner = Cleaner(
            tags=tags,
            attributes=attributes,
            protocols=protocols,
            strip=True,
            strip_comments=True,
        )

    def clean(self, html: str) -> str:
        return self._cleaner.clean(html)


class ContentProcessor:
    '''Renders a raw Markdown post body into HTML that is safe to embed in a page.'''

    def __init__(self, renderer: Optional[MarkdownRenderer] = None, sanitizer: Optional[HtmlSanitizer] = None) -> None:
        self.renderer = renderer or MarkdownRenderer()
        self.sanitizer = sanitizer or HtmlSanitizer()

    def render(self, text: Optional[str]) -> str:
        if not text:
            return ''
        return self.sanitizer.clean(self.renderer.render(text))


def sanitize_text(value: Optional[str]) -> str:
    '''Strip every tag from a plain-text field and escape what remains.'''
    if not value:
        return ''
    return bleach.clean(value, tags=set(), attributes={}, strip=True).strip()
