from nexgen.database.base import Base
from nexgen.database.engine import create_store_engine

__all__ = ["Base", "create_store_engine"]
