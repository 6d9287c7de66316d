# Import all models once to ensure SQLAlchemy mapper registry is fully populated.
# This prevents late-binding issues for relationship("ClassName").

from .users.models import User  # noqa: F401
from .interests.models import Interest  # noqa: F401
from .articles.models import Article, UserArticle  # noqa: F401
from .auth.models import SessionRecord  # noqa: F401
