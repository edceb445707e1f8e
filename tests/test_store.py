"""Tests for the JSON post store."""

from __future__ import annotations

import json

import pytest

from models import Post
from store import PostStore


def _make_post(post_id: int = 1, created_at: str = "2024-01-01T00:00:00.000Z") -> Post:
    return Post(
        id=post_id,
        title=f"Post {post_id}",
        content="Some body text.",
        excerpt="Some body text....",
        author="Ada",
        created_at=created_at,
        reading_time=1,
    )


class TestLoad:
    def test_missing_document_is_created_empty(self, tmp_path):
        path = tmp_path / "nested" / "posts.json"
        store = PostStore(str(path))

        assert store.load() == []
        assert json.loads(path.read_text(encoding="utf-8")) == {"posts": []}

    def test_reads_existing_posts(self, tmp_path):
        path = tmp_path / "posts.json"
        path.write_text(
            json.dumps(
                {
                    "posts": [
                        {
                            "id": 4,
                            "title": "Hello",
                            "content": "# Hi",
                            "excerpt": "Hi...",
                            "author": "Grace",
                            "createdAt": "2024-03-01T10:00:00.000Z",
                            "readingTime": 2,
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )

        posts = PostStore(str(path)).load()

        assert len(posts) == 1
        assert posts[0].id == 4
        assert posts[0].author == "Grace"
        assert posts[0].reading_time == 2

    def test_record_fields_are_coerced_and_defaulted(self, tmp_path):
        path = tmp_path / "posts.json"
        path.write_text(
            json.dumps(
                {"posts": [{"id": "7", "title": "T", "content": "C", "author": "A", "createdAt": "2024-01-01"}]}
            ),
            encoding="utf-8",
        )

        post = PostStore(str(path)).load()[0]

        assert post.id == 7
        assert post.excerpt == ""
        assert post.reading_time == 1
        assert post.created_at == "2024-01-01"

    def test_corrupt_document_propagates(self, tmp_path):
        path = tmp_path / "posts.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            PostStore(str(path)).load()


class TestSave:
    def test_rewrites_whole_document(self, store):
        store.save([_make_post(1), _make_post(2)])
        store.save([_make_post(3)])

        assert [p.id for p in store.load()] == [3]

    def test_field_order_and_indentation(self, store):
        store.save([_make_post(1)])

        with open(store.path, encoding="utf-8") as f:
            raw = f.read()
        document = json.loads(raw)
        assert list(document["posts"][0]) == [
            "id",
            "title",
            "content",
            "excerpt",
            "author",
            "createdAt",
            "readingTime",
        ]
        assert '\n  "posts": [' in raw

    def test_preserves_append_order(self, store):
        posts = [_make_post(2, created_at="2024-01-01"), _make_post(1, created_at="2024-05-01")]
        store.save(posts)

        assert [p.id for p in store.load()] == [2, 1]
