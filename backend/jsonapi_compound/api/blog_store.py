"""Blog Store — in-memory sample data for the posts routes.

Invariants:
    - Built once at import; routes only read from it
    - User 12's company and post 2's comments are deliberately never assigned,
      so they stay unloaded and render as MISSING

Design Decisions:
    - Module-level store in the API layer (deliberate exception to no-global-state rule),
      persistence is outside this service
"""

from jsonapi_compound.models.blog import Company, User, Post, Comment


class BlogStore:
    """Read-only lookup over posts built from transient ORM instances."""

    def __init__(self, posts: list[Post]):
        self._posts = {post.id: post for post in posts}

    def get_post(self, post_id: int) -> Post | None:
        return self._posts.get(post_id)

    def list_posts(self) -> list[Post]:
        return [self._posts[key] for key in sorted(self._posts)]


def build_sample_store() -> BlogStore:
    acme = Company(id=3, name="Acme Publishing")
    ada = User(id=9, name="Ada", email="ada@example.com", company_id=3, company=acme)
    brian = User(id=12, name="Brian", email="brian@example.com")

    launch = Post(
        id=1, title="Launch notes", body="We shipped compound documents.",
        author_id=9, author=ada,
    )
    launch.comments = [
        Comment(id=5, body="Nice work", post_id=1, author_id=9, author=ada),
        Comment(id=6, body="Any benchmarks?", post_id=1, author_id=12, author=brian),
    ]

    followup = Post(
        id=2, title="Follow-up", body="Benchmarks are coming.",
        author_id=12, author=brian,
    )
    return BlogStore([launch, followup])


blog_store = build_sample_store()
