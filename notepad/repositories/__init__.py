from .folders import FolderRepository
from .notebook import Notebook
from .notes import NoteRepository

__all__ = [
    "FolderRepository",
    "NoteRepository",
    "Notebook",
]
