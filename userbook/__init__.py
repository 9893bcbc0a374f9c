"""Server-rendered name list: FastAPI form, SQLAlchemy storage."""
