# yaopets/api/posts/test_posts.py
"""
게시글 서비스 테스트

사용법: python -m pytest yaopets/api/posts/test_posts.py -v
"""


def test_create_post_snapshots_author(seeded_store):
    post = seeded_store.posts.create_post(5, "  New friend!  ", ["https://img.example/1.jpg", ""])

    assert post.post_id == 109
    assert post.content == "New friend!"
    assert post.media_urls == ["https://img.example/1.jpg"]
    assert post.author_username == "emma"
    assert post.author_photo_url == "https://randomuser.me/api/portraits/women/33.jpg"
    assert (post.likes_count, post.comments_count) == (0, 0)

def test_create_post_requires_content_or_media(store):
    assert store.posts.create_post(1, "   ") is None
    assert store.posts.create_post(None, "hello") is None
    assert store.posts.create_post(1, "", ["https://img.example/only-image.jpg"]).content == ""

def test_all_posts_newest_first(store):
    ids = [store.posts.create_post(1, f"post {i}").post_id for i in range(3)]

    assert [p.post_id for p in store.posts.get_all_posts()] == list(reversed(ids))

def test_posts_by_user(seeded_store):
    seeded_store.posts.create_post(2, "second post by bob")

    assert [p.author_id for p in seeded_store.posts.get_posts_by_user_id(2)] == [2, 2]
    assert seeded_store.posts.count_posts_by_user_id(2) == 2
    assert seeded_store.posts.count_posts_by_user_id(404) == 0

def test_update_post_by_author_only(seeded_store):
    assert seeded_store.posts.update_post(102, 3, content="not mine") is None

    post = seeded_store.posts.update_post(102, 2, content="Thor went to the park")
    assert post.content == "Thor went to the park"
    assert post.likes_count == 8
    assert seeded_store.posts.get_post_by_id(102).content == "Thor went to the park"

def test_update_post_cannot_empty_it(store):
    post = store.posts.create_post(1, "text only")

    assert store.posts.update_post(post.post_id, 1, content="  ") is None
    assert store.posts.get_post_by_id(post.post_id).content == "text only"

def test_set_cover_image(seeded_store):
    post = seeded_store.posts.set_cover_image(101, "https://cdn.example/luna.jpg")
    assert post.cover_image == "https://cdn.example/luna.jpg"

    text_post = seeded_store.posts.create_post(1, "no image")
    assert text_post.cover_image is None
    assert seeded_store.posts.set_cover_image(text_post.post_id, "https://cdn.example/new.jpg").media_urls == [
        "https://cdn.example/new.jpg"
    ]
    assert seeded_store.posts.set_cover_image(404, "https://cdn.example/x.jpg") is None
