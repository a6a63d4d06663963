from sqlalchemy.orm import declarative_base

Base = declarative_base()


def import_models():
    """Import every model module so ``Base.metadata`` knows all five tables."""
    from bloghub.db.models import user, post, comment, like, comment_like  # noqa: F401
