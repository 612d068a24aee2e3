from author_manager.models.author import Author
from author_manager.models.post import Post

__all__ = ["Author", "Post"]
