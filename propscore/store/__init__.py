"""Analysis record stores."""

from propscore.store.base import AnalysisStore
from propscore.store.memory import InMemoryAnalysisStore
from propscore.store.postgres import PostgresAnalysisStore

__all__ = ["AnalysisStore", "InMemoryAnalysisStore", "PostgresAnalysisStore"]
