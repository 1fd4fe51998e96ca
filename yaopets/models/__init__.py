# yaopets/models/__init__.py
from .user import User
from .pet import Pet
from .post import Post
from .comment import Comment
from .relation import Relation, RelationPair, ToggleResult

__all__ = [
    'User', 'Pet', 'Post', 'Comment',
    'Relation', 'RelationPair', 'ToggleResult',
]
