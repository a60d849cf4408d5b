# Import models so Base metadata is aware of them
from .library import StudySet, Vocabulary  # noqa: F401
